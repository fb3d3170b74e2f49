"""
CRUD operations for chores and goals, plus the read-only views of the
user and their transactions. Balance-changing operations live in ledger.py.
"""
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from chore_wallet.config import DEFAULT_CHORE_ICON, MAX_TRANSACTION_LIMIT, TRANSACTION_LIMIT
from chore_wallet.data.models import Chore, Goal, Transaction, User, utcnow
from chore_wallet.data.repos import chores_repo, goals_repo, transactions_repo
from chore_wallet.domain.errors import NotFoundError
from chore_wallet.domain.ledger import ledger_operation
from chore_wallet.domain.money import ZERO
from chore_wallet.domain.seed import ensure_default_user

CHORE_FIELDS = ["name", "description", "amount", "icon"]
GOAL_FIELDS = ["name", "description", "target_amount"]


def get_current_user(session: Session) -> User:
    return ensure_default_user(session)


# ============================================
# CHORES
# ============================================

def list_chores(session: Session, user_id: int) -> List[Chore]:
    """Active chores only, newest first."""
    return chores_repo.list_active_chores(session, user_id)


def _get_owned_chore(session: Session, user_id: int, chore_id: int) -> Chore:
    chore = chores_repo.get_chore(session, chore_id)
    if not chore or not chore.is_active or chore.user_id != user_id:
        raise NotFoundError("Chore not found")
    return chore


def create_chore(session: Session, user_id: int, data: Dict) -> Chore:
    chore = chores_repo.create_chore(
        session,
        Chore(
            user_id=user_id,
            name=data["name"],
            description=data.get("description"),
            amount=data["amount"],
            icon=data.get("icon") or DEFAULT_CHORE_ICON,
            is_active=True,
            created_at=utcnow(),
        ),
    )
    session.commit()
    return chore


def update_chore(session: Session, user_id: int, chore_id: int, data: Dict) -> Chore:
    chore = _get_owned_chore(session, user_id, chore_id)
    updates = {field: data[field] for field in CHORE_FIELDS if field in data}
    # name and amount are required columns; an explicit null leaves them unchanged
    for field in ["name", "amount"]:
        if field in updates and updates[field] is None:
            updates.pop(field)
    chores_repo.update_chore(session, chore, updates)
    session.commit()
    return chore


def delete_chore(session: Session, user_id: int, chore_id: int) -> None:
    """Soft delete: past transactions keep pointing at the chore."""
    chore = _get_owned_chore(session, user_id, chore_id)
    chores_repo.deactivate_chore(session, chore)
    session.commit()


# ============================================
# GOALS
# ============================================

def list_goals(session: Session, user_id: int) -> List[Goal]:
    """Goals that are not yet completed, newest first."""
    return goals_repo.list_open_goals(session, user_id)


def _get_owned_goal(session: Session, user_id: int, goal_id: int, for_update: bool = False) -> Goal:
    goal = goals_repo.get_goal(session, goal_id, for_update=for_update)
    if not goal or goal.user_id != user_id:
        raise NotFoundError("Goal not found")
    return goal


def create_goal(session: Session, user_id: int, data: Dict) -> Goal:
    goal = goals_repo.create_goal(
        session,
        Goal(
            user_id=user_id,
            name=data["name"],
            description=data.get("description"),
            target_amount=data["target_amount"],
            current_amount=ZERO,
            is_completed=False,
            created_at=utcnow(),
        ),
    )
    session.commit()
    return goal


def update_goal(session: Session, user_id: int, goal_id: int, data: Dict) -> Goal:
    """
    Update name, description or target; completion is recomputed against the new target.

    Runs under the user's ledger lock so an allocation cannot land between
    reading current_amount and writing is_completed.
    """
    updates = {field: data[field] for field in GOAL_FIELDS if field in data}
    for field in ["name", "target_amount"]:
        if field in updates and updates[field] is None:
            updates.pop(field)
    with ledger_operation(session, user_id):
        goal = _get_owned_goal(session, user_id, goal_id, for_update=True)
        goals_repo.update_goal(session, goal, updates)
    return goal


def delete_goal(session: Session, user_id: int, goal_id: int) -> None:
    with ledger_operation(session, user_id):
        goal = _get_owned_goal(session, user_id, goal_id, for_update=True)
        goals_repo.delete_goal(session, goal)


# ============================================
# TRANSACTIONS
# ============================================

def list_transactions(session: Session, user_id: int, limit: Optional[int] = None) -> List[Transaction]:
    """Most recent transactions first, capped at TRANSACTION_LIMIT unless a limit is given."""
    if limit is None:
        limit = TRANSACTION_LIMIT
    limit = max(1, min(limit, MAX_TRANSACTION_LIMIT))
    return transactions_repo.list_transactions(session, user_id, limit)
