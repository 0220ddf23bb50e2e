"""Tests for CheckoutService against in-memory stores."""

from decimal import Decimal

import pytest

from backoffice.domain.pos.model.value import PaymentMethod
from backoffice.domain.pos.service.checkout import CheckoutService
from backoffice.domain.shared.error import (
    InsufficientStockError,
    InvalidPaymentError,
    NotFoundError,
)
from backoffice.infrastructure.memory.repository import (
    InMemoryCustomerRepository,
    InMemoryItemRepository,
    InMemorySaleRepository,
    InMemoryTransactionRepository,
)
from tests.unit.factories import make_actor, make_customer, make_item


def _make_service(stock: int = 5) -> CheckoutService:
    return CheckoutService(
        item_repo=InMemoryItemRepository([make_item(price="100.00", stock=stock)]),
        customer_repo=InMemoryCustomerRepository([make_customer()]),
        sale_repo=InMemorySaleRepository(),
        transaction_repo=InMemoryTransactionRepository(),
    )


async def _start_with_two(service: CheckoutService) -> str:
    txn = await service.start(make_actor("editor"))
    await service.add_item(txn.id, "101", 2)
    return txn.id


class TestBuildingSale:
    @pytest.mark.asyncio
    async def test_add_item_persists_cart(self) -> None:
        service = _make_service()
        txn_id = await _start_with_two(service)

        txn = await service.get(txn_id)
        assert txn.cart.item_count == 2
        assert txn.total == Decimal("216.00")

    @pytest.mark.asyncio
    async def test_unknown_item(self) -> None:
        service = _make_service()
        txn = await service.start(make_actor())

        with pytest.raises(NotFoundError):
            await service.add_item(txn.id, "nope")

    @pytest.mark.asyncio
    async def test_unknown_transaction(self) -> None:
        with pytest.raises(NotFoundError):
            await _make_service().get("missing")

    @pytest.mark.asyncio
    async def test_rejected_add_keeps_stored_cart(self) -> None:
        service = _make_service(stock=2)
        txn_id = await _start_with_two(service)

        with pytest.raises(InsufficientStockError):
            await service.add_item(txn_id, "101")

        assert (await service.get(txn_id)).cart.item_count == 2

    @pytest.mark.asyncio
    async def test_update_to_zero_removes(self) -> None:
        service = _make_service()
        txn_id = await _start_with_two(service)

        txn = await service.update_quantity(txn_id, "101", 0)

        assert txn.cart.is_empty

    @pytest.mark.asyncio
    async def test_attach_unknown_customer(self) -> None:
        service = _make_service()
        txn_id = await _start_with_two(service)

        with pytest.raises(NotFoundError):
            await service.attach_customer(txn_id, "cust-999")


class TestCompleteSale:
    @pytest.mark.asyncio
    async def test_cash_sale_applies_effects(self) -> None:
        service = _make_service(stock=5)
        txn_id = await _start_with_two(service)
        await service.attach_customer(txn_id, "cust-001")
        await service.checkout(txn_id)

        sale = await service.complete(txn_id, PaymentMethod.CASH, "250.00")

        assert sale.total == Decimal("216.00")
        item = await service.item_repo.get("101")
        assert item is not None and item.stock == 3
        assert item.last_updated is not None
        customer = await service.customer_repo.get("cust-001")
        assert customer is not None
        assert customer.total_purchases == Decimal("216.00")
        assert customer.visits == 1
        assert await service.sale_repo.list_all() == [sale]
        assert await service.transaction_repo.get(txn_id) is None

    @pytest.mark.asyncio
    async def test_short_cash_changes_nothing(self) -> None:
        service = _make_service(stock=5)
        txn_id = await _start_with_two(service)
        await service.checkout(txn_id)

        with pytest.raises(InvalidPaymentError):
            await service.complete(txn_id, PaymentMethod.CASH, "200.00")

        item = await service.item_repo.get("101")
        assert item is not None and item.stock == 5
        assert await service.sale_repo.list_all() == []
        assert (await service.get(txn_id)).is_open

    @pytest.mark.asyncio
    @pytest.mark.parametrize("cash", ["NaN", "sNaN", "Infinity"])
    async def test_non_finite_cash_changes_nothing(self, cash: str) -> None:
        service = _make_service(stock=5)
        txn_id = await _start_with_two(service)
        await service.checkout(txn_id)

        with pytest.raises(InvalidPaymentError):
            await service.complete(txn_id, PaymentMethod.CASH, cash)

        item = await service.item_repo.get("101")
        assert item is not None and item.stock == 5
        assert await service.sale_repo.list_all() == []
        stored = await service.get(txn_id)
        assert stored.is_open and stored.payment_method is None

    @pytest.mark.asyncio
    async def test_stock_sold_elsewhere_blocks_completion(self) -> None:
        service = _make_service(stock=5)
        txn_id = await _start_with_two(service)
        await service.checkout(txn_id)
        await service.item_repo.save(make_item(price="100.00", stock=1))

        with pytest.raises(InsufficientStockError):
            await service.complete(txn_id, PaymentMethod.CARD)

        assert await service.sale_repo.list_all() == []

    @pytest.mark.asyncio
    async def test_cancel_discards_transaction(self) -> None:
        service = _make_service()
        txn_id = await _start_with_two(service)

        await service.cancel(txn_id)

        with pytest.raises(NotFoundError):
            await service.get(txn_id)
        item = await service.item_repo.get("101")
        assert item is not None and item.stock == 5
