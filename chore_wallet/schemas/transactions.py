import datetime
from typing import Optional

from chore_wallet.schemas.common import CamelModel, MoneyOut


class TransactionOut(CamelModel):
    id: int
    user_id: int
    type: str
    amount: MoneyOut
    description: str
    chore_id: Optional[int] = None
    goal_id: Optional[int] = None
    created_at: datetime.datetime


class ClaimResponse(CamelModel):
    transaction: TransactionOut
    new_balance: MoneyOut
