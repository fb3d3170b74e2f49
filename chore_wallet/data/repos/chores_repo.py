from typing import Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from chore_wallet.data.models import Chore


def list_active_chores(session: Session, user_id: int) -> List[Chore]:
    return (
        session.execute(
            select(Chore)
            .where(Chore.user_id == user_id, Chore.is_active.is_(True))
            .order_by(Chore.created_at.desc(), Chore.id.desc())
        )
        .scalars()
        .all()
    )


def get_chore(session: Session, chore_id: int) -> Optional[Chore]:
    return session.get(Chore, chore_id)


def create_chore(session: Session, chore: Chore) -> Chore:
    session.add(chore)
    session.flush()
    return chore


def update_chore(session: Session, chore: Chore, updates: Dict) -> Chore:
    for key, value in updates.items():
        setattr(chore, key, value)
    session.flush()
    return chore


def deactivate_chore(session: Session, chore: Chore) -> None:
    chore.is_active = False
    session.flush()


def delete_user_chores(session: Session, user_id: int) -> int:
    result = session.execute(delete(Chore).where(Chore.user_id == user_id))
    return result.rowcount
