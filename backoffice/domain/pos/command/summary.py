from decimal import Decimal

from backoffice.domain.pos.model.transaction import Transaction
from backoffice.domain.pos.model.value import TransactionStatus
from backoffice.domain.shared.command import Result
from backoffice.domain.shared.model.money import DEFAULT_CURRENCY_SYMBOL, format_currency


class CartSummary(Result):
    transaction_id: str
    status: TransactionStatus
    item_count: int
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    display_total: str

    @classmethod
    def of(cls, txn: Transaction, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL) -> "CartSummary":
        return cls(
            transaction_id=txn.id,
            status=txn.status,
            item_count=txn.cart.item_count,
            subtotal=txn.subtotal,
            tax=txn.tax,
            total=txn.total,
            display_total=format_currency(txn.total, currency_symbol),
        )
