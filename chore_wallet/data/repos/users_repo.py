from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from chore_wallet.data.models import User


def get_user(session: Session, user_id: int, for_update: bool = False) -> Optional[User]:
    # populate_existing so a balance read inside the ledger lock is never a stale identity-map copy
    return session.get(User, user_id, with_for_update=for_update, populate_existing=True)


def get_user_by_username(session: Session, username: str) -> Optional[User]:
    return session.execute(select(User).where(User.username == username)).scalar_one_or_none()


def create_user(session: Session, user: User) -> User:
    session.add(user)
    session.flush()
    return user


def update_balance(session: Session, user: User, new_balance: Decimal) -> User:
    user.total_balance = new_balance
    session.flush()
    return user
