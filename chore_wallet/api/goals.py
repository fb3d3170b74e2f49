"""
Savings goal endpoints: listing, CRUD, and allocating balance to a goal.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from chore_wallet.api.deps import get_db, get_user
from chore_wallet.data.models import User
from chore_wallet.domain import ledger, services
from chore_wallet.schemas.common import MessageResponse
from chore_wallet.schemas.goals import AllocateRequest, AllocateResponse, GoalCreate, GoalOut, GoalUpdate

router = APIRouter()


@router.get("/api/goals", response_model=list[GoalOut])
def list_goals(db: Session = Depends(get_db), user: User = Depends(get_user)):
    """Goals not yet completed, newest first."""
    return services.list_goals(db, user.id)


@router.post("/api/goals", response_model=GoalOut)
def create_goal(request: GoalCreate, db: Session = Depends(get_db), user: User = Depends(get_user)):
    return services.create_goal(db, user.id, request.model_dump())


@router.post("/api/goals/allocate", response_model=AllocateResponse)
def allocate_to_goal(request: AllocateRequest, db: Session = Depends(get_db), user: User = Depends(get_user)):
    """
    Move money from the balance into a goal.

    Args:
        request: goalId and a positive amount no larger than the balance
        db: Database session (auto-injected)

    Returns:
        The goal_allocation transaction, the new balance and the updated goal
    """
    transaction, new_balance, goal = ledger.allocate_to_goal(db, user.id, request.goal_id, request.amount)
    return {"transaction": transaction, "new_balance": new_balance, "updated_goal": goal}


@router.patch("/api/goals/{goal_id}", response_model=GoalOut)
def update_goal(goal_id: int, request: GoalUpdate, db: Session = Depends(get_db), user: User = Depends(get_user)):
    return services.update_goal(db, user.id, goal_id, request.model_dump(exclude_unset=True))


@router.delete("/api/goals/{goal_id}", response_model=MessageResponse)
def delete_goal(goal_id: int, db: Session = Depends(get_db), user: User = Depends(get_user)):
    """Permanently delete a goal. Money already allocated to it is not returned."""
    services.delete_goal(db, user.id, goal_id)
    return {"message": "Goal deleted successfully"}
