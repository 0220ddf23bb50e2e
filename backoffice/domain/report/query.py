from datetime import date, datetime

from pydantic import Field

from backoffice.domain.auth.model.identity import Identity
from backoffice.domain.auth.service.authorization import AuthorizationEvaluator
from backoffice.domain.report.service.dashboard import DashboardService, DashboardStats
from backoffice.domain.report.service.sales import (
    DEFAULT_PAGE_SIZE,
    ReportPeriod,
    SalesFilter,
    SalesPage,
    SalesReport,
    SalesService,
    SortField,
    SortOrder,
    period_range,
)
from backoffice.domain.shared.authorization.gate import requires
from backoffice.domain.shared.query import Query, QueryHandler, Result


class GetDashboardStats(Query):
    pass


class DashboardStatsResult(Result):
    stats: DashboardStats


class GetDashboardStatsHandler(QueryHandler[GetDashboardStats, DashboardStatsResult]):
    __auth__ = requires("dashboard.view")
    identity: Identity
    authz: AuthorizationEvaluator
    dashboard_service: DashboardService

    async def run(self, query: GetDashboardStats) -> DashboardStatsResult:
        return DashboardStatsResult(stats=await self.dashboard_service.stats())


class SearchSales(Query):
    filters: SalesFilter = SalesFilter()
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    sort_by: SortField = SortField.TIMESTAMP
    sort_order: SortOrder = SortOrder.DESC


class SalesSearchResult(Result):
    page: SalesPage


class SearchSalesHandler(QueryHandler[SearchSales, SalesSearchResult]):
    __auth__ = requires("sales.view")
    identity: Identity
    authz: AuthorizationEvaluator
    sales_service: SalesService

    async def run(self, query: SearchSales) -> SalesSearchResult:
        page = await self.sales_service.search(
            query.filters,
            page=query.page,
            limit=query.limit,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
        )
        return SalesSearchResult(page=page)


class GetSalesReport(Query):
    """A report for a named period, or for an explicit ``start``..``end`` range."""

    period: ReportPeriod = ReportPeriod.TODAY
    start: datetime | None = None
    end: datetime | None = None


class SalesReportResult(Result):
    report: SalesReport


class GetSalesReportHandler(QueryHandler[GetSalesReport, SalesReportResult]):
    __auth__ = requires("pos.reports")
    identity: Identity
    authz: AuthorizationEvaluator
    sales_service: SalesService

    async def run(self, query: GetSalesReport) -> SalesReportResult:
        start, end = period_range(query.period)
        report = await self.sales_service.report(query.start or start, query.end or end)
        return SalesReportResult(report=report)


class ExportSales(Query):
    filters: SalesFilter = SalesFilter()
    filename: str = Field(default="sales_export", min_length=1)


class SalesExport(Result):
    filename: str
    content_type: str = "text/csv"
    content: str
    row_count: int


class ExportSalesHandler(QueryHandler[ExportSales, SalesExport]):
    __auth__ = requires("sales.export")
    identity: Identity
    authz: AuthorizationEvaluator
    sales_service: SalesService

    async def run(self, query: ExportSales) -> SalesExport:
        content, rows = await self.sales_service.export_csv(query.filters)
        return SalesExport(
            filename=f"{query.filename}_{date.today().isoformat()}.csv",
            content=content,
            row_count=rows,
        )
