import datetime
from typing import Annotated, Optional

from pydantic import BeforeValidator, Field

from chore_wallet.schemas.common import CamelModel, MoneyOut, PositiveAmount, strip_text
from chore_wallet.schemas.transactions import TransactionOut

GoalName = Annotated[str, BeforeValidator(strip_text), Field(min_length=1, max_length=120)]


class GoalCreate(CamelModel):
    name: GoalName
    description: Optional[str] = None
    target_amount: PositiveAmount


class GoalUpdate(CamelModel):
    name: Optional[GoalName] = None
    description: Optional[str] = None
    target_amount: Optional[PositiveAmount] = None


class GoalOut(CamelModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    target_amount: MoneyOut
    current_amount: MoneyOut
    is_completed: bool
    created_at: datetime.datetime


class AllocateRequest(CamelModel):
    goal_id: int
    amount: PositiveAmount


class AllocateResponse(CamelModel):
    transaction: TransactionOut
    new_balance: MoneyOut
    updated_goal: GoalOut
