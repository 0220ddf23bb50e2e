"""In-memory adapters for the repository ports.

Used for local runs (``api.use_mock``) and tests. State lives on the instance,
so each container gets its own store.
"""

import hmac
import logging
from collections.abc import Iterable

from backoffice.domain.auth.model.session import Session
from backoffice.domain.auth.model.user import User
from backoffice.domain.auth.port.session_store import SessionStore
from backoffice.domain.auth.port.user_directory import UserDirectory
from backoffice.domain.catalog.model.item import Item
from backoffice.domain.catalog.port.repository import ItemRepository
from backoffice.domain.customer.model.customer import Customer
from backoffice.domain.customer.port.repository import CustomerRepository
from backoffice.domain.pos.model.sale import Sale
from backoffice.domain.pos.model.transaction import Transaction
from backoffice.domain.pos.port.sale_repository import SaleRepository
from backoffice.domain.pos.port.transaction_repository import TransactionRepository

logger = logging.getLogger(__name__)


class InMemoryItemRepository(ItemRepository):
    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: dict[str, Item] = {item.id: item for item in items}

    async def get(self, item_id: str) -> Item | None:
        return self._items.get(item_id)

    async def list_all(self) -> list[Item]:
        return list(self._items.values())

    async def save(self, item: Item) -> None:
        self._items[item.id] = item


class InMemoryCustomerRepository(CustomerRepository):
    def __init__(self, customers: Iterable[Customer] = ()) -> None:
        self._customers: dict[str, Customer] = {c.id: c for c in customers}

    async def get(self, customer_id: str) -> Customer | None:
        return self._customers.get(customer_id)

    async def list_all(self) -> list[Customer]:
        return list(self._customers.values())

    async def save(self, customer: Customer) -> None:
        self._customers[customer.id] = customer


class InMemorySaleRepository(SaleRepository):
    def __init__(self, sales: Iterable[Sale] = ()) -> None:
        self._sales: list[Sale] = list(sales)

    async def save(self, sale: Sale) -> None:
        self._sales.append(sale)
        logger.debug("Sale recorded: id=%s (total sales: %d)", sale.id, len(self._sales))

    async def list_all(self) -> list[Sale]:
        return list(self._sales)


class InMemoryTransactionRepository(TransactionRepository):
    """Open transactions keyed by id.

    Transactions are stored as copies so a caller mutating its own instance
    does not change the stored state until it saves again.
    """

    def __init__(self) -> None:
        self._transactions: dict[str, Transaction] = {}

    async def get(self, transaction_id: str) -> Transaction | None:
        txn = self._transactions.get(transaction_id)
        return txn.model_copy(deep=True) if txn is not None else None

    async def save(self, transaction: Transaction) -> None:
        self._transactions[transaction.id] = transaction.model_copy(deep=True)

    async def delete(self, transaction_id: str) -> bool:
        return self._transactions.pop(transaction_id, None) is not None


class InMemorySessionStore(SessionStore):
    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    async def get(self, token: str) -> Session | None:
        return self._sessions.get(token)

    async def save(self, session: Session) -> None:
        self._sessions[session.token] = session

    async def delete(self, token: str) -> bool:
        return self._sessions.pop(token, None) is not None


class InMemoryUserDirectory(UserDirectory):
    """Accounts keyed by email (case-insensitive), each with a plain dev password."""

    def __init__(self, accounts: Iterable[tuple[User, str]] = ()) -> None:
        self._accounts: dict[str, tuple[User, str]] = {
            user.email.lower(): (user, password) for user, password in accounts
        }

    async def authenticate(self, email: str, password: str) -> User | None:
        account = self._accounts.get(email.strip().lower())
        if account is None:
            logger.debug("Login failed: unknown email")
            return None
        user, expected = account
        if not hmac.compare_digest(expected.encode(), password.encode()):
            logger.debug("Login failed: wrong password for user=%s", user.id)
            return None
        return user
