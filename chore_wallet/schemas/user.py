import datetime

from chore_wallet.schemas.common import CamelModel, MoneyOut


class UserOut(CamelModel):
    id: int
    username: str
    total_balance: MoneyOut
    created_at: datetime.datetime
