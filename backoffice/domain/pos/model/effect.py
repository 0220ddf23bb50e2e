"""Effects a completed transaction requests of external collaborators.

The transaction only declares these; the checkout service applies them
through the item and customer repositories.
"""

from decimal import Decimal

from pydantic import Field

from backoffice.domain.shared.model.money import Money
from backoffice.domain.shared.model.value import ValueObject


class StockDecrement(ValueObject):
    item_id: str
    quantity: int = Field(ge=1)


class CustomerPurchaseIncrement(ValueObject):
    customer_id: str
    amount: Money = Field(ge=Decimal(0))


Effect = StockDecrement | CustomerPurchaseIncrement
