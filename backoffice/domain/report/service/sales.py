"""Sales history: filtered search, period reports and CSV export.

All three read the full history from ``SaleRepository.list_all`` and work on
it in memory. Timestamps without a timezone are taken as UTC.
"""

import csv
import io
import logging
import math
from collections import defaultdict
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from enum import StrEnum

from backoffice.domain.pos.model.sale import Sale
from backoffice.domain.pos.model.value import PaymentMethod, PaymentStatus
from backoffice.domain.pos.port.sale_repository import SaleRepository
from backoffice.domain.shared.error import ValidationError
from backoffice.domain.shared.model.money import Money, format_for_export
from backoffice.domain.shared.model.value import CamelValueObject
from backoffice.domain.shared.service import Service

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
TOP_ITEMS = 5

EXPORT_HEADERS = (
    "Sale ID",
    "Date/Time",
    "Customer",
    "Staff Member",
    "Items Count",
    "Subtotal",
    "Tax",
    "Total",
    "Payment Method",
    "Payment Status",
)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class SortField(StrEnum):
    TIMESTAMP = "timestamp"
    TOTAL = "total"
    CUSTOMER_NAME = "customerName"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class ReportPeriod(StrEnum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class SalesFilter(CamelValueObject):
    """Criteria a sale must meet; unset fields match everything.

    ``query`` matches case-insensitively against the customer name, any
    line's item name or sku, and the sale id.
    """

    query: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    customer_id: str | None = None
    payment_method: PaymentMethod | None = None
    payment_status: PaymentStatus | None = None
    staff_id: str | None = None

    def _matches_query(self, sale: Sale) -> bool:
        needle = (self.query or "").strip().lower()
        if not needle:
            return True
        if sale.customer_name and needle in sale.customer_name.lower():
            return True
        if any(needle in line.item_name.lower() or needle in line.sku.lower() for line in sale.items):
            return True
        return needle in sale.id.lower()

    def matches(self, sale: Sale) -> bool:
        timestamp = _as_utc(sale.timestamp)
        if self.start_date is not None and timestamp < _as_utc(self.start_date):
            return False
        if self.end_date is not None and timestamp > _as_utc(self.end_date):
            return False
        if self.customer_id is not None and sale.customer_id != self.customer_id:
            return False
        if self.payment_method is not None and sale.payment_method != self.payment_method:
            return False
        if self.payment_status is not None and sale.payment_status != self.payment_status:
            return False
        if self.staff_id is not None and sale.staff_id != self.staff_id:
            return False
        return self._matches_query(sale)


class SalesPage(CamelValueObject):
    sales: tuple[Sale, ...]
    total: int
    page: int
    total_pages: int


class PaymentMethodTotal(CamelValueObject):
    method: PaymentMethod
    amount: Money
    count: int
    percentage: Decimal


class ItemSales(CamelValueObject):
    item_id: str
    item_name: str
    quantity: int
    revenue: Money


class SalesReport(CamelValueObject):
    start: datetime
    end: datetime
    total_sales: Money
    total_transactions: int
    average_sale: Money
    payment_methods: tuple[PaymentMethodTotal, ...]
    top_selling_items: tuple[ItemSales, ...] = ()


def period_range(period: ReportPeriod, now: datetime | None = None) -> tuple[datetime, datetime]:
    """Start and end of a reporting period ending ``now``.

    ``today`` starts at midnight; the others reach back one week, one
    calendar month or one calendar year (clamped to the month's last day).
    """
    end = _as_utc(now or datetime.now(UTC))
    if period == ReportPeriod.TODAY:
        start = end.replace(hour=0, minute=0, second=0, microsecond=0)
    elif period == ReportPeriod.WEEK:
        start = end - timedelta(days=7)
    elif period == ReportPeriod.MONTH:
        year, month = (end.year, end.month - 1) if end.month > 1 else (end.year - 1, 12)
        start = _replace_clamped(end, year, month)
    else:
        start = _replace_clamped(end, end.year - 1, end.month)
    return start, end


def _replace_clamped(value: datetime, year: int, month: int) -> datetime:
    day = value.day
    while True:
        try:
            return value.replace(year=year, month=month, day=day)
        except ValueError:
            day -= 1


def _sort_key(field: SortField):
    if field == SortField.TOTAL:
        return lambda sale: sale.total
    if field == SortField.CUSTOMER_NAME:
        return lambda sale: (sale.customer_name or "").lower()
    return lambda sale: _as_utc(sale.timestamp)


class SalesService(Service):
    sale_repo: SaleRepository

    async def _matching(
        self,
        filters: SalesFilter,
        sort_by: SortField = SortField.TIMESTAMP,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> list[Sale]:
        sales = [s for s in await self.sale_repo.list_all() if filters.matches(s)]
        # sorted() is stable in both directions, so ties keep history order
        return sorted(sales, key=_sort_key(sort_by), reverse=sort_order == SortOrder.DESC)

    async def search(
        self,
        filters: SalesFilter | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        sort_by: SortField = SortField.TIMESTAMP,
        sort_order: SortOrder = SortOrder.DESC,
    ) -> SalesPage:
        """One page of matching sales, newest first by default."""
        if page < 1:
            raise ValidationError("Page must be 1 or greater", field="page")
        if limit < 1:
            raise ValidationError("Page size must be 1 or greater", field="limit")

        sales = await self._matching(filters or SalesFilter(), sort_by, sort_order)
        offset = (page - 1) * limit
        return SalesPage(
            sales=tuple(sales[offset : offset + limit]),
            total=len(sales),
            page=page,
            total_pages=math.ceil(len(sales) / limit),
        )

    async def report(self, start: datetime, end: datetime) -> SalesReport:
        """Totals for completed sales between ``start`` and ``end`` inclusive."""
        if _as_utc(start) > _as_utc(end):
            raise ValidationError("Report start must not be after its end", field="start")

        filters = SalesFilter(
            start_date=start, end_date=end, payment_status=PaymentStatus.COMPLETED
        )
        sales = await self._matching(filters)
        total = sum((s.total for s in sales), Decimal(0))

        by_method: dict[PaymentMethod, list[Sale]] = defaultdict(list)
        for sale in sales:
            by_method[sale.payment_method].append(sale)
        methods = []
        for method in PaymentMethod:
            amount = sum((s.total for s in by_method[method]), Decimal(0))
            methods.append(
                PaymentMethodTotal(
                    method=method,
                    amount=amount,
                    count=len(by_method[method]),
                    percentage=amount / total * 100 if total else Decimal(0),
                )
            )

        quantities: dict[str, int] = defaultdict(int)
        revenue: dict[str, Decimal] = defaultdict(Decimal)
        names: dict[str, str] = {}
        for sale in sales:
            for line in sale.items:
                quantities[line.item_id] += line.quantity
                revenue[line.item_id] += line.subtotal
                names.setdefault(line.item_id, line.item_name)
        top = sorted(quantities, key=lambda item_id: (-quantities[item_id], -revenue[item_id]))

        logger.debug("Sales report %s..%s: %d sales, total=%s", start, end, len(sales), total)
        return SalesReport(
            start=start,
            end=end,
            total_sales=total,
            total_transactions=len(sales),
            average_sale=total / len(sales) if sales else Decimal(0),
            payment_methods=tuple(methods),
            top_selling_items=tuple(
                ItemSales(
                    item_id=item_id,
                    item_name=names[item_id],
                    quantity=quantities[item_id],
                    revenue=revenue[item_id],
                )
                for item_id in top[:TOP_ITEMS]
            ),
        )

    async def export_csv(self, filters: SalesFilter | None = None) -> tuple[str, int]:
        """Every matching sale as CSV text, newest first. Returns the text and row count."""
        sales = await self._matching(filters or SalesFilter())

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(EXPORT_HEADERS)
        for sale in sales:
            writer.writerow(
                (
                    sale.id,
                    _as_utc(sale.timestamp).isoformat(),
                    sale.customer_name or "Guest",
                    sale.staff_name,
                    len(sale.items),
                    format_for_export(sale.subtotal),
                    format_for_export(sale.tax),
                    format_for_export(sale.total),
                    sale.payment_method.value,
                    sale.payment_status.value,
                )
            )
        logger.info("Exported %d sales", len(sales))
        return buffer.getvalue(), len(sales)
