"""
Account endpoint. There is a single default user; it is created the first
time any endpoint runs.
"""
from fastapi import APIRouter, Depends

from chore_wallet.api.deps import get_user
from chore_wallet.data.models import User
from chore_wallet.schemas.user import UserOut

router = APIRouter()


@router.get("/api/user", response_model=UserOut)
def read_user(user: User = Depends(get_user)):
    """Return the user with their current unallocated balance."""
    return user
