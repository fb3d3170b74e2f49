from __future__ import annotations

import os

os.environ.setdefault("CHORE_WALLET_DATABASE_URL", "sqlite+pysqlite:///:memory:")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from chore_wallet.api.deps import get_db
from chore_wallet.data.database import Base, enable_sqlite_foreign_keys
from chore_wallet.data.models import Chore, Goal, User, utcnow
from chore_wallet.data.repos import transactions_repo
from chore_wallet.domain.seed import ensure_default_user, hash_password
from chore_wallet.main import app


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def kid(db: Session) -> User:
    return ensure_default_user(db)


def make_user(db: Session, username: str) -> User:
    user = User(username=username, password=hash_password("secret"), total_balance=Decimal("0.00"))
    db.add(user)
    db.commit()
    return user


def make_chore(db: Session, user: User, name: str = "Dishes", amount: str = "5.00", **extra) -> Chore:
    chore = Chore(user_id=user.id, name=name, amount=Decimal(amount), created_at=utcnow(), **extra)
    db.add(chore)
    db.commit()
    return chore


def make_goal(db: Session, user: User, name: str = "Bike", target: str = "10.00") -> Goal:
    goal = Goal(
        user_id=user.id,
        name=name,
        target_amount=Decimal(target),
        current_amount=Decimal("0.00"),
        is_completed=False,
        created_at=utcnow(),
    )
    db.add(goal)
    db.commit()
    return goal


def ledger_sum(db: Session, user_id: int) -> Decimal:
    return sum(
        (Decimal(t.amount) for t in transactions_repo.list_transactions(db, user_id)),
        Decimal("0.00"),
    )
