from decimal import Decimal

from backoffice.domain.catalog.model.item import DEFAULT_LOW_STOCK_THRESHOLD, ItemStatus
from backoffice.domain.catalog.port.repository import ItemRepository
from backoffice.domain.pos.port.sale_repository import SaleRepository
from backoffice.domain.shared.model.money import Money
from backoffice.domain.shared.model.value import CamelValueObject
from backoffice.domain.shared.service import Service


class DashboardStats(CamelValueObject):
    total_revenue: Money
    total_orders: int
    active_items: int
    low_stock_items: int


class DashboardService(Service):
    item_repo: ItemRepository
    sale_repo: SaleRepository
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD

    async def stats(self) -> DashboardStats:
        sales = await self.sale_repo.list_all()
        active = [i for i in await self.item_repo.list_all() if i.status == ItemStatus.ACTIVE]
        return DashboardStats(
            total_revenue=sum((s.total for s in sales), Decimal(0)),
            total_orders=len(sales),
            active_items=len(active),
            low_stock_items=sum(1 for i in active if i.is_low_stock(self.low_stock_threshold)),
        )
