from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from chore_wallet.domain.money import format_money, parse_positive_amount

# Amounts leave the API as two-decimal strings, e.g. "12.50"
MoneyOut = Annotated[Decimal, PlainSerializer(format_money, return_type=str, when_used="always")]
# Amounts arrive as strings or numbers and must be greater than zero
PositiveAmount = Annotated[Decimal, BeforeValidator(parse_positive_amount)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    message: str


def strip_text(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value
