from typing import Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from chore_wallet.data.models import Goal


def list_open_goals(session: Session, user_id: int) -> List[Goal]:
    return (
        session.execute(
            select(Goal)
            .where(Goal.user_id == user_id, Goal.is_completed.is_(False))
            .order_by(Goal.created_at.desc(), Goal.id.desc())
        )
        .scalars()
        .all()
    )


def get_goal(session: Session, goal_id: int, for_update: bool = False) -> Optional[Goal]:
    if for_update:
        return session.get(Goal, goal_id, with_for_update=True, populate_existing=True)
    return session.get(Goal, goal_id)


def create_goal(session: Session, goal: Goal) -> Goal:
    session.add(goal)
    session.flush()
    return goal


def update_goal(session: Session, goal: Goal, updates: Dict) -> Goal:
    for key, value in updates.items():
        setattr(goal, key, value)
    goal.is_completed = goal.current_amount >= goal.target_amount
    session.flush()
    return goal


def delete_goal(session: Session, goal: Goal) -> None:
    session.delete(goal)
    session.flush()


def delete_user_goals(session: Session, user_id: int) -> int:
    result = session.execute(delete(Goal).where(Goal.user_id == user_id))
    return result.rowcount
