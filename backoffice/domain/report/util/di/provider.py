from dishka import provide

from backoffice.config import Config
from backoffice.domain.catalog.port.repository import ItemRepository
from backoffice.domain.pos.port.sale_repository import SaleRepository
from backoffice.domain.report.query import (
    ExportSalesHandler,
    GetDashboardStatsHandler,
    GetSalesReportHandler,
    SearchSalesHandler,
)
from backoffice.domain.report.service.dashboard import DashboardService
from backoffice.domain.report.service.sales import SalesService
from backoffice.util.di.base import Provider
from backoffice.util.di.scope import Scope


class ReportProvider(Provider):
    # Query Handlers
    get_dashboard_stats_handler = provide(GetDashboardStatsHandler, scope=Scope.UOW)
    search_sales_handler = provide(SearchSalesHandler, scope=Scope.UOW)
    get_sales_report_handler = provide(GetSalesReportHandler, scope=Scope.UOW)
    export_sales_handler = provide(ExportSalesHandler, scope=Scope.UOW)

    @provide(scope=Scope.UOW)
    def get_dashboard_service(
        self, config: Config, item_repo: ItemRepository, sale_repo: SaleRepository
    ) -> DashboardService:
        return DashboardService(
            item_repo=item_repo,
            sale_repo=sale_repo,
            low_stock_threshold=config.catalog.low_stock_threshold,
        )

    @provide(scope=Scope.UOW)
    def get_sales_service(self, sale_repo: SaleRepository) -> SalesService:
        return SalesService(sale_repo=sale_repo)
