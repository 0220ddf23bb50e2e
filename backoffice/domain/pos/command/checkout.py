from decimal import Decimal

import logfire

from backoffice.domain.auth.model.identity import Identity
from backoffice.domain.auth.service.authorization import AuthorizationEvaluator
from backoffice.domain.pos.command.summary import CartSummary
from backoffice.domain.pos.model.pricing import compute_change
from backoffice.domain.pos.model.sale import Sale
from backoffice.domain.pos.model.value import PaymentMethod
from backoffice.domain.pos.service.checkout import CheckoutService
from backoffice.domain.shared.authorization.gate import requires
from backoffice.domain.shared.command import Command, CommandHandler, Result
from backoffice.domain.shared.model.money import format_currency


class Checkout(Command):
    transaction_id: str


class CompleteSale(Command):
    transaction_id: str
    payment_method: PaymentMethod
    cash_received: str | None = None  # as typed at the till, e.g. "250.00"


class SaleCompleted(Result):
    sale: Sale
    change: Decimal
    display_total: str
    display_change: str


class CancelSale(Command):
    transaction_id: str


class SaleCancelled(Result):
    transaction_id: str


class CheckoutHandler(CommandHandler[Checkout, CartSummary]):
    __auth__ = requires("pos.create")
    identity: Identity
    authz: AuthorizationEvaluator
    checkout_service: CheckoutService

    async def run(self, cmd: Checkout) -> CartSummary:
        txn = await self.checkout_service.checkout(cmd.transaction_id)
        return CartSummary.of(txn, self.checkout_service.currency_symbol)


class CompleteSaleHandler(CommandHandler[CompleteSale, SaleCompleted]):
    __auth__ = requires("pos.create")
    identity: Identity
    authz: AuthorizationEvaluator
    checkout_service: CheckoutService

    async def run(self, cmd: CompleteSale) -> SaleCompleted:
        with logfire.span("CompleteSale"):
            sale = await self.checkout_service.complete(
                cmd.transaction_id,
                cmd.payment_method,
                cmd.cash_received,
            )
            change = (
                compute_change(cmd.cash_received, sale.total)
                if cmd.payment_method == PaymentMethod.CASH and cmd.cash_received
                else Decimal(0)
            )
            logfire.info("Sale completed", sale_id=sale.id, total=str(sale.total))
            symbol = self.checkout_service.currency_symbol
            return SaleCompleted(
                sale=sale,
                change=change,
                display_total=format_currency(sale.total, symbol),
                display_change=format_currency(change, symbol),
            )


class CancelSaleHandler(CommandHandler[CancelSale, SaleCancelled]):
    __auth__ = requires("pos.create")
    identity: Identity
    authz: AuthorizationEvaluator
    checkout_service: CheckoutService

    async def run(self, cmd: CancelSale) -> SaleCancelled:
        with logfire.span("CancelSale"):
            txn = await self.checkout_service.cancel(cmd.transaction_id)
            return SaleCancelled(transaction_id=txn.id)
