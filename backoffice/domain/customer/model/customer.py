from datetime import UTC, datetime
from decimal import Decimal

from pydantic import Field

from backoffice.domain.shared.model.money import Money
from backoffice.domain.shared.model.value import CamelValueObject


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Customer(CamelValueObject):
    id: str
    name: str
    email: str
    phone: str | None = None
    total_purchases: Money = Decimal(0)
    visits: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=_utc_now)
    last_visit: datetime | None = None

    def record_purchase(self, amount: Decimal, at: datetime | None = None) -> "Customer":
        """Return a copy with the purchase added to the running total and visit count."""
        return self.model_copy(
            update={
                "total_purchases": self.total_purchases + amount,
                "visits": self.visits + 1,
                "last_visit": at or _utc_now(),
            }
        )
