import pytest

from backoffice.domain.auth.model.rbac import DEFAULT_RBAC_TABLE
from backoffice.domain.auth.service.authorization import AuthorizationEvaluator
from backoffice.domain.catalog.model.item import ItemStatus
from backoffice.domain.catalog.query import SearchCatalog, SearchCatalogHandler
from backoffice.domain.catalog.service.catalog import CatalogService
from backoffice.domain.shared.error import AuthorizationError
from backoffice.infrastructure.memory.repository import InMemoryItemRepository
from tests.unit.factories import make_actor, make_item


def _make_service(low_stock_threshold: int = 5) -> CatalogService:
    items = [
        make_item("101", name="Thunderbolt RC Car", sku="RC-4WD-001", category="RC Vehicles"),
        make_item("102", name="Dragon Launcher", sku="BB-LNC-002", category="Beyblade", stock=3),
        make_item("103", name="Stadium Arena", sku="BB-ARN-003", category="Beyblade", stock=0),
        make_item(
            "104",
            name="Battery Pack",
            sku="RC-BAT-004",
            category="RC Parts",
            status=ItemStatus.DRAFT,
        ),
    ]
    return CatalogService(
        item_repo=InMemoryItemRepository(items), low_stock_threshold=low_stock_threshold
    )


class TestSellableItems:
    @pytest.mark.asyncio
    async def test_only_active_in_stock(self) -> None:
        items = await _make_service().sellable_items()
        assert [i.id for i in items] == ["101", "102"]

    @pytest.mark.asyncio
    async def test_search_matches_name_or_sku_case_insensitively(self) -> None:
        service = _make_service()
        assert [i.id for i in await service.sellable_items(search="dragon")] == ["102"]
        assert [i.id for i in await service.sellable_items(search="rc-4wd")] == ["101"]

    @pytest.mark.asyncio
    async def test_category_filter(self) -> None:
        service = _make_service()
        assert [i.id for i in await service.sellable_items(category="Beyblade")] == ["102"]
        assert len(await service.sellable_items(category="all")) == 2

    @pytest.mark.asyncio
    async def test_categories_first_seen_order(self) -> None:
        assert await _make_service().categories() == ["all", "RC Vehicles", "Beyblade"]

    @pytest.mark.asyncio
    async def test_low_stock_uses_threshold(self) -> None:
        low = await _make_service(low_stock_threshold=3).low_stock_items()
        assert {i.id for i in low} == {"102", "103"}


class TestSearchCatalogHandler:
    @pytest.mark.asyncio
    async def test_viewer_can_browse(self) -> None:
        handler = SearchCatalogHandler(
            identity=make_actor("viewer"),
            authz=AuthorizationEvaluator(rbac=DEFAULT_RBAC_TABLE),
            catalog_service=_make_service(),
        )

        page = await handler.run(SearchCatalog(category="Beyblade"))

        assert [i.id for i in page.items] == ["102"]
        assert page.categories[0] == "all"

    @pytest.mark.asyncio
    async def test_no_role_is_denied(self) -> None:
        handler = SearchCatalogHandler(
            identity=make_actor(None),
            authz=AuthorizationEvaluator(rbac=DEFAULT_RBAC_TABLE),
            catalog_service=_make_service(),
        )

        with pytest.raises(AuthorizationError):
            await handler.run(SearchCatalog())
