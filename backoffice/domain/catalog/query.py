from backoffice.domain.auth.model.identity import Identity
from backoffice.domain.auth.service.authorization import AuthorizationEvaluator
from backoffice.domain.catalog.model.item import Item
from backoffice.domain.catalog.service.catalog import CatalogService
from backoffice.domain.shared.authorization.gate import requires_any
from backoffice.domain.shared.query import Query, QueryHandler, Result


class SearchCatalog(Query):
    search: str | None = None
    category: str | None = None


class CatalogPage(Result):
    items: list[Item]
    categories: list[str]


class SearchCatalogHandler(QueryHandler[SearchCatalog, CatalogPage]):
    __auth__ = requires_any("pos.view", "inventory.view")
    identity: Identity
    authz: AuthorizationEvaluator
    catalog_service: CatalogService

    async def run(self, query: SearchCatalog) -> CatalogPage:
        items = await self.catalog_service.sellable_items(query.search, query.category)
        return CatalogPage(items=items, categories=await self.catalog_service.categories())
