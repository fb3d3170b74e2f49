"""
Chore endpoints: listing, CRUD, and claiming payment for a completed chore.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from chore_wallet.api.deps import get_db, get_user
from chore_wallet.config import CHORE_ICONS
from chore_wallet.data.models import User
from chore_wallet.domain import ledger, services
from chore_wallet.schemas.chores import ChoreCreate, ChoreIconOut, ChoreOut, ChoreUpdate
from chore_wallet.schemas.common import MessageResponse
from chore_wallet.schemas.transactions import ClaimResponse

router = APIRouter()


@router.get("/api/chores", response_model=list[ChoreOut])
def list_chores(db: Session = Depends(get_db), user: User = Depends(get_user)):
    """Active chores, newest first."""
    return services.list_chores(db, user.id)


@router.get("/api/chores/icons", response_model=list[ChoreIconOut])
def list_chore_icons():
    """Icon tags the UI knows how to draw."""
    return CHORE_ICONS


@router.post("/api/chores", response_model=ChoreOut)
def create_chore(request: ChoreCreate, db: Session = Depends(get_db), user: User = Depends(get_user)):
    return services.create_chore(db, user.id, request.model_dump())


@router.patch("/api/chores/{chore_id}", response_model=ChoreOut)
def update_chore(
    chore_id: int, request: ChoreUpdate, db: Session = Depends(get_db), user: User = Depends(get_user)
):
    """Update only the fields present in the body."""
    return services.update_chore(db, user.id, chore_id, request.model_dump(exclude_unset=True))


@router.delete("/api/chores/{chore_id}", response_model=MessageResponse)
def delete_chore(chore_id: int, db: Session = Depends(get_db), user: User = Depends(get_user)):
    """
    Soft-delete a chore. It disappears from listings but transactions that
    reference it stay valid.
    """
    services.delete_chore(db, user.id, chore_id)
    return {"message": "Chore deleted successfully"}


@router.post("/api/chores/{chore_id}/claim", response_model=ClaimResponse)
def claim_chore(chore_id: int, db: Session = Depends(get_db), user: User = Depends(get_user)):
    """
    Pay the user for a completed chore.

    Args:
        chore_id: ID of an active chore owned by the user
        db: Database session (auto-injected)

    Returns:
        The chore_completed transaction and the new balance
    """
    transaction, new_balance = ledger.claim_chore(db, user.id, chore_id)
    return {"transaction": transaction, "new_balance": new_balance}
