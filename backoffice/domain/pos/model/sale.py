from datetime import datetime
from decimal import Decimal

from backoffice.domain.pos.model.value import PaymentMethod, PaymentStatus
from backoffice.domain.shared.model.money import Money
from backoffice.domain.shared.model.value import CamelValueObject


class SaleLine(CamelValueObject):
    item_id: str
    item_name: str
    sku: str
    quantity: int
    price: Money
    discount: Money = Decimal(0)
    subtotal: Money


class Sale(CamelValueObject):
    """Immutable record of a completed transaction."""

    id: str
    timestamp: datetime
    items: tuple[SaleLine, ...]
    subtotal: Money
    tax: Money
    total: Money
    payment_method: PaymentMethod
    payment_status: PaymentStatus = PaymentStatus.COMPLETED
    customer_id: str | None = None
    customer_name: str | None = None
    staff_id: str
    staff_name: str = ""
