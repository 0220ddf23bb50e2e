from dishka import provide

from backoffice.domain.auth.port.session_store import SessionStore
from backoffice.domain.auth.port.user_directory import UserDirectory
from backoffice.domain.catalog.port.repository import ItemRepository
from backoffice.domain.customer.port.repository import CustomerRepository
from backoffice.domain.pos.port.sale_repository import SaleRepository
from backoffice.domain.pos.port.transaction_repository import TransactionRepository
from backoffice.infrastructure.di import RepositoryProvider
from backoffice.infrastructure.memory.repository import (
    InMemoryCustomerRepository,
    InMemoryItemRepository,
    InMemorySaleRepository,
    InMemorySessionStore,
    InMemoryTransactionRepository,
    InMemoryUserDirectory,
)
from backoffice.infrastructure.memory.seed import (
    SAMPLE_CUSTOMERS,
    SAMPLE_ITEMS,
    SAMPLE_SALES,
    SAMPLE_USERS,
)
from backoffice.util.di.base import Provider
from backoffice.util.di.scope import Scope


class InMemoryRepositoryProvider(RepositoryProvider):
    __is_mock__ = True

    # Singletons so state survives across units of work
    @provide(scope=Scope.APP)
    def get_item_repo(self) -> ItemRepository:
        return InMemoryItemRepository(SAMPLE_ITEMS)

    @provide(scope=Scope.APP)
    def get_customer_repo(self) -> CustomerRepository:
        return InMemoryCustomerRepository(SAMPLE_CUSTOMERS)

    @provide(scope=Scope.APP)
    def get_sale_repo(self) -> SaleRepository:
        return InMemorySaleRepository(SAMPLE_SALES)

    @provide(scope=Scope.APP)
    def get_user_directory(self) -> UserDirectory:
        return InMemoryUserDirectory(SAMPLE_USERS)


class SessionStateProvider(Provider):
    """Open transactions and sessions are client-session state, always held in memory."""

    @provide(scope=Scope.APP)
    def get_transaction_repo(self) -> TransactionRepository:
        return InMemoryTransactionRepository()

    @provide(scope=Scope.APP)
    def get_session_store(self) -> SessionStore:
        return InMemorySessionStore()
