import logging
from datetime import UTC, datetime
from decimal import Decimal

from backoffice.domain.auth.model.actor import Actor
from backoffice.domain.catalog.port.repository import ItemRepository
from backoffice.domain.customer.port.repository import CustomerRepository
from backoffice.domain.pos.model.effect import CustomerPurchaseIncrement, Effect, StockDecrement
from backoffice.domain.pos.model.pricing import DEFAULT_TAX_RATE
from backoffice.domain.pos.model.sale import Sale
from backoffice.domain.pos.model.transaction import Transaction
from backoffice.domain.pos.model.value import PaymentMethod
from backoffice.domain.pos.port.sale_repository import SaleRepository
from backoffice.domain.pos.port.transaction_repository import TransactionRepository
from backoffice.domain.shared.error import InsufficientStockError, NotFoundError
from backoffice.domain.shared.model.money import DEFAULT_CURRENCY_SYMBOL
from backoffice.domain.shared.service import Service

logger = logging.getLogger(__name__)


class CheckoutService(Service):
    """Drives a transaction through its lifecycle against the stores.

    Items are looked up through the catalog port when lines are added. On
    completion the transaction's requested effects are applied here: stock
    decrements on the item store, purchase totals on the customer store.
    Stock and customer are re-checked before payment is confirmed so a
    failed completion leaves every store untouched.
    """

    item_repo: ItemRepository
    customer_repo: CustomerRepository
    sale_repo: SaleRepository
    transaction_repo: TransactionRepository
    tax_rate: Decimal = DEFAULT_TAX_RATE
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL

    async def start(self, staff: Actor) -> Transaction:
        txn = Transaction(staff_id=staff.id, staff_name=staff.name, tax_rate=self.tax_rate)
        await self.transaction_repo.save(txn)
        logger.debug("Transaction started: id=%s staff=%s", txn.id, staff.id)
        return txn

    async def get(self, transaction_id: str) -> Transaction:
        txn = await self.transaction_repo.get(transaction_id)
        if txn is None:
            raise NotFoundError(f"Transaction not found: {transaction_id}")
        return txn

    async def add_item(self, transaction_id: str, item_id: str, qty: int = 1) -> Transaction:
        txn = await self.get(transaction_id)
        item = await self.item_repo.get(item_id)
        if item is None:
            raise NotFoundError(f"Item not found: {item_id}")
        txn.add_item(item, qty)
        await self.transaction_repo.save(txn)
        return txn

    async def update_quantity(self, transaction_id: str, item_id: str, qty: int) -> Transaction:
        txn = await self.get(transaction_id)
        txn.update_quantity(item_id, qty)
        await self.transaction_repo.save(txn)
        return txn

    async def remove_item(self, transaction_id: str, item_id: str) -> Transaction:
        txn = await self.get(transaction_id)
        txn.remove_item(item_id)
        await self.transaction_repo.save(txn)
        return txn

    async def set_discount(
        self, transaction_id: str, item_id: str, percent: Decimal | int | float | str
    ) -> Transaction:
        txn = await self.get(transaction_id)
        txn.set_discount(item_id, percent)
        await self.transaction_repo.save(txn)
        return txn

    async def attach_customer(self, transaction_id: str, customer_id: str | None) -> Transaction:
        txn = await self.get(transaction_id)
        customer = None
        if customer_id is not None:
            customer = await self.customer_repo.get(customer_id)
            if customer is None:
                raise NotFoundError(f"Customer not found: {customer_id}")
        txn.attach_customer(customer)
        await self.transaction_repo.save(txn)
        return txn

    async def checkout(self, transaction_id: str) -> Transaction:
        txn = await self.get(transaction_id)
        txn.checkout()
        await self.transaction_repo.save(txn)
        return txn

    async def complete(
        self,
        transaction_id: str,
        method: PaymentMethod,
        cash_received: Decimal | int | float | str | None = None,
    ) -> Sale:
        """Confirm payment, apply the requested effects and record the sale."""
        txn = await self.get(transaction_id)
        await self._verify_collaborators(txn)

        txn.select_payment(method, cash_received)
        effects = txn.confirm_payment()
        await self._apply(effects)

        sale = txn.to_sale()
        await self.sale_repo.save(sale)
        await self.transaction_repo.delete(txn.id)
        logger.info(
            "Sale completed: id=%s total=%s method=%s lines=%d",
            sale.id,
            sale.total,
            sale.payment_method,
            len(sale.items),
        )
        return sale

    async def cancel(self, transaction_id: str) -> Transaction:
        txn = await self.get(transaction_id)
        txn.cancel()
        await self.transaction_repo.delete(txn.id)
        logger.info("Transaction cancelled: id=%s", txn.id)
        return txn

    async def _verify_collaborators(self, txn: Transaction) -> None:
        for line in txn.cart.lines:
            current = await self.item_repo.get(line.item_id)
            if current is None:
                raise NotFoundError(f"Item not found: {line.item_id}")
            if current.stock < line.quantity:
                raise InsufficientStockError(
                    line.item_id, requested=line.quantity, available=current.stock
                )
        if txn.customer_id is not None and await self.customer_repo.get(txn.customer_id) is None:
            raise NotFoundError(f"Customer not found: {txn.customer_id}")

    async def _apply(self, effects: list[Effect]) -> None:
        now = datetime.now(UTC)
        for effect in effects:
            if isinstance(effect, StockDecrement):
                item = await self.item_repo.get(effect.item_id)
                if item is None:
                    raise NotFoundError(f"Item not found: {effect.item_id}")
                await self.item_repo.save(
                    item.model_copy(
                        update={"stock": item.stock - effect.quantity, "last_updated": now}
                    )
                )
            elif isinstance(effect, CustomerPurchaseIncrement):
                customer = await self.customer_repo.get(effect.customer_id)
                if customer is None:
                    raise NotFoundError(f"Customer not found: {effect.customer_id}")
                await self.customer_repo.save(customer.record_purchase(effect.amount, at=now))
