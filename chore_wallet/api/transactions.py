"""
Transaction history, undo, and the complete reset.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from chore_wallet.api.deps import get_db, get_user
from chore_wallet.config import MAX_TRANSACTION_LIMIT
from chore_wallet.data.models import User
from chore_wallet.domain import ledger, services
from chore_wallet.schemas.common import MessageResponse
from chore_wallet.schemas.transactions import TransactionOut

router = APIRouter()


@router.get("/api/transactions", response_model=list[TransactionOut])
def list_transactions(
    limit: Optional[int] = Query(default=None, ge=1, le=MAX_TRANSACTION_LIMIT),
    db: Session = Depends(get_db),
    user: User = Depends(get_user),
):
    """Most recent transactions first (10 unless a limit is given)."""
    return services.list_transactions(db, user.id, limit)


@router.delete("/api/transactions/{transaction_id}", response_model=MessageResponse)
def undo_transaction(transaction_id: int, db: Session = Depends(get_db), user: User = Depends(get_user)):
    """
    Undo a transaction made within the last 24 hours and delete it.

    Args:
        transaction_id: ID of one of the user's transactions
        db: Database session (auto-injected)

    Returns:
        Confirmation message; fails if the transaction is missing, belongs
        to someone else, or is too old
    """
    ledger.undo_transaction(db, user.id, transaction_id)
    return {"message": "Transaction undone successfully"}


@router.post("/api/reset", response_model=MessageResponse)
def complete_reset(db: Session = Depends(get_db), user: User = Depends(get_user)):
    """Delete every chore, goal and transaction and set the balance to 0.00."""
    ledger.complete_reset(db, user.id)
    return {"message": "Complete reset successful"}
