import datetime
from typing import Annotated, Optional

from pydantic import BeforeValidator, Field

from chore_wallet.schemas.common import CamelModel, MoneyOut, PositiveAmount, strip_text

ChoreName = Annotated[str, BeforeValidator(strip_text), Field(min_length=1, max_length=120)]
ChoreIcon = Annotated[str, BeforeValidator(strip_text), Field(min_length=1, max_length=40)]


class ChoreCreate(CamelModel):
    name: ChoreName
    description: Optional[str] = None
    amount: PositiveAmount
    icon: Optional[ChoreIcon] = None


class ChoreUpdate(CamelModel):
    name: Optional[ChoreName] = None
    description: Optional[str] = None
    amount: Optional[PositiveAmount] = None
    icon: Optional[ChoreIcon] = None


class ChoreOut(CamelModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    amount: MoneyOut
    icon: Optional[str] = None
    is_active: bool
    created_at: datetime.datetime


class ChoreIconOut(CamelModel):
    value: str
    label: str
