"""Cart: an immutable, ordered list of cart lines.

Every mutation returns a new Cart; a rejected mutation raises and the caller
keeps the cart it passed in.
"""

from decimal import Decimal

from pydantic import Field

from backoffice.domain.catalog.model.item import Item
from backoffice.domain.shared.error import InsufficientStockError, ValidationError
from backoffice.domain.shared.model.money import Money, to_decimal
from backoffice.domain.shared.model.value import ValueObject

HUNDRED = Decimal(100)


class CartLine(ValueObject):
    """A requested quantity of one catalog item, with an optional discount percentage."""

    item: Item
    quantity: int = Field(ge=1)
    discount: Money = Field(default=Decimal(0), ge=0, le=100)

    @property
    def item_id(self) -> str:
        return self.item.id

    @property
    def subtotal(self) -> Decimal:
        return self.item.price * self.quantity * (1 - self.discount / HUNDRED)


class Cart(ValueObject):
    lines: tuple[CartLine, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def line(self, item_id: str) -> CartLine | None:
        return next((line for line in self.lines if line.item_id == item_id), None)

    def add_line(self, item: Item, qty: int = 1) -> "Cart":
        """Add ``qty`` of an item, merging into its existing line.

        Raises InsufficientStockError if the resulting quantity would exceed
        the item's stock.
        """
        if qty < 1:
            raise ValidationError(f"Quantity must be at least 1, got {qty}", field="quantity")

        existing = self.line(item.id)
        requested = qty + (existing.quantity if existing else 0)
        if requested > item.stock:
            raise InsufficientStockError(item.id, requested=requested, available=item.stock)

        if existing is None:
            return self._with_lines((*self.lines, CartLine(item=item, quantity=qty)))
        return self._replace(item.id, existing.model_copy(update={"quantity": requested}))

    def update_line_quantity(self, item_id: str, qty: int) -> "Cart":
        """Set a line's quantity; zero or less removes the line.

        Stock is checked against the item snapshot the line was added with.
        Unknown item ids leave the cart unchanged.
        """
        existing = self.line(item_id)
        if existing is None:
            return self
        if qty <= 0:
            return self.remove_line(item_id)
        if qty > existing.item.stock:
            raise InsufficientStockError(item_id, requested=qty, available=existing.item.stock)
        return self._replace(item_id, existing.model_copy(update={"quantity": qty}))

    def remove_line(self, item_id: str) -> "Cart":
        if self.line(item_id) is None:
            return self
        return self._with_lines(tuple(line for line in self.lines if line.item_id != item_id))

    def set_line_discount(self, item_id: str, percent: Decimal | int | float | str) -> "Cart":
        discount = to_decimal(percent)
        if not 0 <= discount <= HUNDRED:
            raise ValidationError(
                f"Discount must be between 0 and 100 percent, got {discount}",
                field="discount",
            )
        existing = self.line(item_id)
        if existing is None:
            return self
        return self._replace(item_id, existing.model_copy(update={"discount": discount}))

    def _replace(self, item_id: str, new_line: CartLine) -> "Cart":
        return self._with_lines(
            tuple(new_line if line.item_id == item_id else line for line in self.lines)
        )

    def _with_lines(self, lines: tuple[CartLine, ...]) -> "Cart":
        return Cart(lines=lines)
