"""Money helpers.

Amounts are ``Decimal`` at full precision; rounding happens only when an
amount is formatted for display.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated

from pydantic import BeforeValidator, PlainSerializer

from backoffice.domain.shared.error import ValidationError

CENTS = Decimal("0.01")

DEFAULT_CURRENCY_SYMBOL = "₱"


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Coerce a number or numeric string (e.g. a cash-tendered input) to Decimal.

    NaN and infinities are rejected: an amount must be finite.
    """
    if isinstance(value, float):
        # str() keeps the shortest repr, so 299.99 stays 299.99
        value = str(value)
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"Not a valid amount: {value!r}", field="amount") from None
    if not value.is_finite():
        raise ValidationError(f"Not a finite amount: {value!r}", field="amount")
    return value


Money = Annotated[
    Decimal,
    BeforeValidator(to_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]


def round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(
    amount: Decimal | int | float | str, symbol: str = DEFAULT_CURRENCY_SYMBOL
) -> str:
    """Format an amount for display, e.g. ``₱1,250.75``."""
    value = round_cents(to_decimal(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_for_export(amount: Decimal | int | float | str) -> str:
    """Plain two-decimal text without a currency symbol (CSV exports)."""
    return f"{round_cents(to_decimal(amount)):.2f}"
