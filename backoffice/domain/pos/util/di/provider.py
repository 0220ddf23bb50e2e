from dishka import provide

from backoffice.config import Config
from backoffice.domain.catalog.port.repository import ItemRepository
from backoffice.domain.customer.port.repository import CustomerRepository
from backoffice.domain.pos.command.cart import (
    AddToCartHandler,
    AttachCustomerHandler,
    RemoveFromCartHandler,
    SetLineDiscountHandler,
    StartSaleHandler,
    UpdateCartLineHandler,
)
from backoffice.domain.pos.command.checkout import (
    CancelSaleHandler,
    CheckoutHandler,
    CompleteSaleHandler,
)
from backoffice.domain.pos.port.sale_repository import SaleRepository
from backoffice.domain.pos.port.transaction_repository import TransactionRepository
from backoffice.domain.pos.service.checkout import CheckoutService
from backoffice.util.di.base import Provider
from backoffice.util.di.scope import Scope


class PosProvider(Provider):
    # Command Handlers
    start_sale_handler = provide(StartSaleHandler, scope=Scope.UOW)
    add_to_cart_handler = provide(AddToCartHandler, scope=Scope.UOW)
    update_cart_line_handler = provide(UpdateCartLineHandler, scope=Scope.UOW)
    remove_from_cart_handler = provide(RemoveFromCartHandler, scope=Scope.UOW)
    set_line_discount_handler = provide(SetLineDiscountHandler, scope=Scope.UOW)
    attach_customer_handler = provide(AttachCustomerHandler, scope=Scope.UOW)
    checkout_handler = provide(CheckoutHandler, scope=Scope.UOW)
    complete_sale_handler = provide(CompleteSaleHandler, scope=Scope.UOW)
    cancel_sale_handler = provide(CancelSaleHandler, scope=Scope.UOW)

    @provide(scope=Scope.UOW)
    def get_checkout_service(
        self,
        config: Config,
        item_repo: ItemRepository,
        customer_repo: CustomerRepository,
        sale_repo: SaleRepository,
        transaction_repo: TransactionRepository,
    ) -> CheckoutService:
        return CheckoutService(
            item_repo=item_repo,
            customer_repo=customer_repo,
            sale_repo=sale_repo,
            transaction_repo=transaction_repo,
            tax_rate=config.pos.tax_rate,
            currency_symbol=config.pos.currency_symbol,
        )
