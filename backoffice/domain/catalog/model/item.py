from datetime import datetime
from enum import StrEnum

from pydantic import Field

from backoffice.domain.shared.model.money import Money
from backoffice.domain.shared.model.value import CamelValueObject

DEFAULT_LOW_STOCK_THRESHOLD = 5


class ItemStatus(StrEnum):
    ACTIVE = "active"
    DRAFT = "draft"
    ARCHIVED = "archived"


class Item(CamelValueObject):
    """A priced, stocked catalog item as supplied by the inventory store."""

    id: str
    name: str
    sku: str
    category: str
    price: Money = Field(ge=0)
    stock: int = Field(ge=0)
    description: str = ""
    image_url: str | None = None
    status: ItemStatus = ItemStatus.ACTIVE
    last_updated: datetime | None = None

    @property
    def is_sellable(self) -> bool:
        return self.status == ItemStatus.ACTIVE and self.stock > 0

    def is_low_stock(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> bool:
        return self.stock <= threshold

    def matches(self, search: str) -> bool:
        """Case-insensitive substring match on name or SKU."""
        needle = search.lower()
        return needle in self.name.lower() or needle in self.sku.lower()
