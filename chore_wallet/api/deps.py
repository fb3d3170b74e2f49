from fastapi import Depends
from sqlalchemy.orm import Session

from chore_wallet.data.database import SessionLocal
from chore_wallet.data.models import User
from chore_wallet.domain.services import get_current_user


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_user(db: Session = Depends(get_db)) -> User:
    """The default account; created on first access."""
    return get_current_user(db)
