from backoffice.domain.catalog.model.item import DEFAULT_LOW_STOCK_THRESHOLD, Item
from backoffice.domain.catalog.port.repository import ItemRepository
from backoffice.domain.shared.service import Service

ALL_CATEGORIES = "all"


class CatalogService(Service):
    item_repo: ItemRepository
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD

    async def sellable_items(
        self,
        search: str | None = None,
        category: str | None = None,
    ) -> list[Item]:
        """Active, in-stock items, optionally filtered by name/SKU and category."""
        items = [item for item in await self.item_repo.list_all() if item.is_sellable]
        if search:
            items = [item for item in items if item.matches(search)]
        if category and category != ALL_CATEGORIES:
            items = [item for item in items if item.category == category]
        return items

    async def categories(self) -> list[str]:
        """``"all"`` followed by the distinct categories of sellable items, first-seen order."""
        seen = dict.fromkeys(item.category for item in await self.sellable_items())
        return [ALL_CATEGORIES, *seen]

    async def low_stock_items(self) -> list[Item]:
        return [
            item
            for item in await self.item_repo.list_all()
            if item.is_low_stock(self.low_stock_threshold)
        ]
