from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

from pydantic import Field

from backoffice.domain.catalog.model.item import Item
from backoffice.domain.customer.model.customer import Customer
from backoffice.domain.pos.model.cart import Cart
from backoffice.domain.pos.model.effect import CustomerPurchaseIncrement, Effect, StockDecrement
from backoffice.domain.pos.model.pricing import (
    DEFAULT_TAX_RATE,
    compute_change,
    compute_subtotal,
    compute_tax,
    parse_cash_amount,
    validate_payment,
)
from backoffice.domain.pos.model.sale import Sale, SaleLine
from backoffice.domain.pos.model.value import PaymentMethod, PaymentStatus, TransactionStatus
from backoffice.domain.shared.error import InvalidStateError
from backoffice.domain.shared.model.entity import Aggregate
from backoffice.domain.shared.model.money import Money


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Transaction(Aggregate):
    """A single sale moving through BUILDING -> AWAITING_PAYMENT -> COMPLETED/CANCELLED.

    Line mutations are accepted only while BUILDING. Once COMPLETED the
    transaction is frozen; CANCELLED is reachable from either open state and
    requests no effects.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    staff_id: str
    staff_name: str = ""
    customer_id: str | None = None
    customer_name: str | None = None
    cart: Cart = Cart()
    status: TransactionStatus = TransactionStatus.BUILDING
    payment_method: PaymentMethod | None = None
    cash_received: Money | None = None
    tax_rate: Money = DEFAULT_TAX_RATE
    created_at: datetime = Field(default_factory=_utc_now)
    completed_at: datetime | None = None

    # --- derived totals ---

    @property
    def subtotal(self) -> Decimal:
        return compute_subtotal(self.cart)

    @property
    def tax(self) -> Decimal:
        return compute_tax(self.cart, self.tax_rate)

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tax

    @property
    def change(self) -> Decimal:
        if self.payment_method != PaymentMethod.CASH or self.cash_received is None:
            return Decimal(0)
        return compute_change(self.cash_received, self.total)

    @property
    def is_open(self) -> bool:
        return self.status in (TransactionStatus.BUILDING, TransactionStatus.AWAITING_PAYMENT)

    def _require(self, *allowed: TransactionStatus) -> None:
        if self.status not in allowed:
            raise InvalidStateError(f"Operation not allowed in {self.status} state")

    # --- BUILDING ---

    def add_item(self, item: Item, qty: int = 1) -> None:
        self._require(TransactionStatus.BUILDING)
        self.cart = self.cart.add_line(item, qty)

    def update_quantity(self, item_id: str, qty: int) -> None:
        self._require(TransactionStatus.BUILDING)
        self.cart = self.cart.update_line_quantity(item_id, qty)

    def remove_item(self, item_id: str) -> None:
        self._require(TransactionStatus.BUILDING)
        self.cart = self.cart.remove_line(item_id)

    def set_discount(self, item_id: str, percent: Decimal | int | float | str) -> None:
        self._require(TransactionStatus.BUILDING)
        self.cart = self.cart.set_line_discount(item_id, percent)

    def attach_customer(self, customer: Customer | None) -> None:
        self._require(TransactionStatus.BUILDING, TransactionStatus.AWAITING_PAYMENT)
        self.customer_id = customer.id if customer else None
        self.customer_name = customer.name if customer else None

    def checkout(self) -> None:
        self._require(TransactionStatus.BUILDING)
        if self.cart.is_empty:
            raise InvalidStateError("Cannot check out an empty cart")
        self.status = TransactionStatus.AWAITING_PAYMENT

    # --- AWAITING_PAYMENT ---

    def select_payment(
        self,
        method: PaymentMethod,
        cash_received: Decimal | int | float | str | None = None,
    ) -> None:
        """Record the payment choice. A rejected cash amount changes nothing."""
        self._require(TransactionStatus.AWAITING_PAYMENT)
        cash = parse_cash_amount(cash_received)
        self.payment_method = method
        self.cash_received = cash

    def confirm_payment(self) -> list[Effect]:
        """Validate the selected payment and complete the transaction.

        Returns the effects to apply: one stock decrement per line and, with
        a customer attached, one purchase-total increment. Raises
        InvalidPaymentError (state unchanged) if payment does not validate.
        """
        self._require(TransactionStatus.AWAITING_PAYMENT)
        validate_payment(self.payment_method, self.total, self.cash_received)

        effects: list[Effect] = [
            StockDecrement(item_id=line.item_id, quantity=line.quantity)
            for line in self.cart.lines
        ]
        if self.customer_id is not None:
            effects.append(CustomerPurchaseIncrement(customer_id=self.customer_id, amount=self.total))

        self.status = TransactionStatus.COMPLETED
        self.completed_at = _utc_now()
        return effects

    def cancel(self) -> None:
        self._require(TransactionStatus.BUILDING, TransactionStatus.AWAITING_PAYMENT)
        self.status = TransactionStatus.CANCELLED

    # --- COMPLETED ---

    def to_sale(self) -> Sale:
        self._require(TransactionStatus.COMPLETED)
        assert self.payment_method is not None and self.completed_at is not None
        return Sale(
            id=self.id,
            timestamp=self.completed_at,
            items=tuple(
                SaleLine(
                    item_id=line.item_id,
                    item_name=line.item.name,
                    sku=line.item.sku,
                    quantity=line.quantity,
                    price=line.item.price,
                    discount=line.discount,
                    subtotal=line.subtotal,
                )
                for line in self.cart.lines
            ),
            subtotal=self.subtotal,
            tax=self.tax,
            total=self.total,
            payment_method=self.payment_method,
            payment_status=PaymentStatus.COMPLETED,
            customer_id=self.customer_id,
            customer_name=self.customer_name,
            staff_id=self.staff_id,
            staff_name=self.staff_name,
        )
