"""
Money helpers. Amounts are Decimals with two fraction digits; they cross the
HTTP boundary as strings such as "12.50".
"""
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# Numeric(10, 2) holds at most eight integer digits
MAX_AMOUNT = Decimal("99999999.99")


def to_money(value: Union[Decimal, int, float, str, None]) -> Decimal:
    """Quantize a value to two fraction digits, rounding half up."""
    if value is None:
        return ZERO
    if isinstance(value, float):
        # Go through repr so 0.1 becomes Decimal("0.1") rather than its binary expansion
        value = repr(value)
    try:
        amount = Decimal(value)
        if not amount.is_finite():
            raise ValueError(f"Invalid amount: {value!r}")
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc


def parse_positive_amount(value) -> Decimal:
    """Parse a client-supplied amount; it must be a number greater than zero."""
    if isinstance(value, bool):
        raise ValueError("Amount must be a positive number")
    if isinstance(value, str):
        value = value.strip()
    try:
        amount = to_money(value)
    except ValueError as exc:
        raise ValueError("Amount must be a positive number") from exc
    if amount <= ZERO:
        raise ValueError("Amount must be a positive number")
    if amount > MAX_AMOUNT:
        raise ValueError(f"Amount must not exceed {MAX_AMOUNT}")
    return amount


def format_money(value: Union[Decimal, int, float, str, None]) -> str:
    amount = to_money(value)
    if amount == ZERO:
        # Avoid "-0.00"
        amount = ZERO
    return f"{amount:.2f}"
