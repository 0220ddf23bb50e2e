"""Pricing: subtotal, tax, total, change and payment validation.

All amounts are Decimal at full precision. Nothing here rounds; see
``format_currency`` for display.
"""

from decimal import Decimal

from backoffice.domain.pos.model.cart import Cart
from backoffice.domain.pos.model.value import PaymentMethod
from backoffice.domain.shared.error import InvalidPaymentError, ValidationError
from backoffice.domain.shared.model.money import to_decimal

DEFAULT_TAX_RATE = Decimal("0.08")

ZERO = Decimal(0)


def compute_subtotal(cart: Cart) -> Decimal:
    """Sum of price * quantity * (1 - discount/100) over all lines."""
    return sum((line.subtotal for line in cart.lines), ZERO)


def compute_tax(cart: Cart, tax_rate: Decimal = DEFAULT_TAX_RATE) -> Decimal:
    return compute_subtotal(cart) * tax_rate


def compute_total(cart: Cart, tax_rate: Decimal = DEFAULT_TAX_RATE) -> Decimal:
    return compute_subtotal(cart) + compute_tax(cart, tax_rate)


def compute_change(
    cash_received: Decimal | int | float | str,
    total: Decimal | int | float | str,
) -> Decimal:
    """Change owed to the customer; never negative."""
    return max(ZERO, to_decimal(cash_received) - to_decimal(total))


def parse_cash_amount(cash_received: Decimal | int | float | str | None) -> Decimal | None:
    """The tendered cash as a finite Decimal, or None when nothing was entered.

    Raises InvalidPaymentError for text that is not a finite amount.
    """
    if cash_received is None or (isinstance(cash_received, str) and not cash_received.strip()):
        return None
    try:
        return to_decimal(cash_received)
    except ValidationError as e:
        raise InvalidPaymentError(e.message, code="invalid_cash_amount") from e


def validate_payment(
    method: PaymentMethod | None,
    total: Decimal,
    cash_received: Decimal | int | float | str | None = None,
) -> Decimal:
    """Check a payment can proceed and return the change due.

    Card and digital payments only need a method. Cash must be a finite
    amount covering the total. Raises InvalidPaymentError otherwise.
    """
    if method is None:
        raise InvalidPaymentError("No payment method selected", code="missing_payment_method")

    if method != PaymentMethod.CASH:
        return ZERO

    received = parse_cash_amount(cash_received)
    if received is None:
        raise InvalidPaymentError("Cash amount is required", code="missing_cash_amount")

    if received < total:
        raise InvalidPaymentError(
            f"Cash received {received} is below the total {total}",
            code="insufficient_cash",
            shortfall=total - received,
        )
    return compute_change(received, total)
