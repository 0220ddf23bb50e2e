from dishka import provide

from backoffice.config import Config
from backoffice.domain.catalog.port.repository import ItemRepository
from backoffice.domain.catalog.query import SearchCatalogHandler
from backoffice.domain.catalog.service.catalog import CatalogService
from backoffice.util.di.base import Provider
from backoffice.util.di.scope import Scope


class CatalogProvider(Provider):
    search_catalog_handler = provide(SearchCatalogHandler, scope=Scope.UOW)

    @provide(scope=Scope.UOW)
    def get_catalog_service(self, config: Config, item_repo: ItemRepository) -> CatalogService:
        return CatalogService(
            item_repo=item_repo,
            low_stock_threshold=config.catalog.low_stock_threshold,
        )
