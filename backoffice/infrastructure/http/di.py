"""DI provider for the REST-backed repositories."""

import logging
from typing import AsyncIterable

import httpx
from dishka import provide

from backoffice.config import Config
from backoffice.domain.auth.port.user_directory import UserDirectory
from backoffice.domain.catalog.port.repository import ItemRepository
from backoffice.domain.customer.port.repository import CustomerRepository
from backoffice.domain.pos.port.sale_repository import SaleRepository
from backoffice.infrastructure.di import RepositoryProvider
from backoffice.infrastructure.http.repository import (
    HttpCustomerRepository,
    HttpItemRepository,
    HttpSaleRepository,
    HttpUserDirectory,
)
from backoffice.util.di.scope import Scope

logger = logging.getLogger(__name__)


class HttpRepositoryProvider(RepositoryProvider):
    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_http_client(self, config: Config) -> AsyncIterable[httpx.AsyncClient]:
        """Shared client for the dashboard API, closed with the container."""
        logger.info("Using REST API at %s", config.api.base_url)
        async with httpx.AsyncClient(
            base_url=config.api.base_url,
            timeout=config.api.timeout,
        ) as client:
            yield client

    @provide(scope=Scope.APP, provides=ItemRepository)
    def get_item_repo(self, client: httpx.AsyncClient) -> HttpItemRepository:
        return HttpItemRepository(client)

    @provide(scope=Scope.APP, provides=CustomerRepository)
    def get_customer_repo(self, client: httpx.AsyncClient) -> HttpCustomerRepository:
        return HttpCustomerRepository(client)

    @provide(scope=Scope.APP, provides=SaleRepository)
    def get_sale_repo(self, client: httpx.AsyncClient) -> HttpSaleRepository:
        return HttpSaleRepository(client)

    @provide(scope=Scope.APP, provides=UserDirectory)
    def get_user_directory(self, client: httpx.AsyncClient) -> HttpUserDirectory:
        return HttpUserDirectory(client)
