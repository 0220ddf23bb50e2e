import logfire

from backoffice.domain.auth.model.actor import Actor
from backoffice.domain.auth.model.identity import Identity
from backoffice.domain.auth.service.authorization import AuthorizationEvaluator
from backoffice.domain.pos.command.summary import CartSummary
from backoffice.domain.pos.service.checkout import CheckoutService
from backoffice.domain.shared.authorization.gate import requires
from backoffice.domain.shared.command import Command, CommandHandler


class StartSale(Command):
    pass


class AddToCart(Command):
    transaction_id: str
    item_id: str
    quantity: int = 1


class UpdateCartLine(Command):
    transaction_id: str
    item_id: str
    quantity: int


class RemoveFromCart(Command):
    transaction_id: str
    item_id: str


class SetLineDiscount(Command):
    transaction_id: str
    item_id: str
    percent: str  # 0-100


class AttachCustomer(Command):
    transaction_id: str
    customer_id: str | None


class StartSaleHandler(CommandHandler[StartSale, CartSummary]):
    __auth__ = requires("pos.create")
    identity: Identity
    authz: AuthorizationEvaluator
    checkout_service: CheckoutService

    async def run(self, cmd: StartSale) -> CartSummary:
        with logfire.span("StartSale"):
            assert isinstance(self.identity, Actor)
            txn = await self.checkout_service.start(self.identity)
            return CartSummary.of(txn, self.checkout_service.currency_symbol)


class AddToCartHandler(CommandHandler[AddToCart, CartSummary]):
    __auth__ = requires("pos.create")
    identity: Identity
    authz: AuthorizationEvaluator
    checkout_service: CheckoutService

    async def run(self, cmd: AddToCart) -> CartSummary:
        txn = await self.checkout_service.add_item(cmd.transaction_id, cmd.item_id, cmd.quantity)
        return CartSummary.of(txn, self.checkout_service.currency_symbol)


class UpdateCartLineHandler(CommandHandler[UpdateCartLine, CartSummary]):
    __auth__ = requires("pos.create")
    identity: Identity
    authz: AuthorizationEvaluator
    checkout_service: CheckoutService

    async def run(self, cmd: UpdateCartLine) -> CartSummary:
        txn = await self.checkout_service.update_quantity(
            cmd.transaction_id, cmd.item_id, cmd.quantity
        )
        return CartSummary.of(txn, self.checkout_service.currency_symbol)


class RemoveFromCartHandler(CommandHandler[RemoveFromCart, CartSummary]):
    __auth__ = requires("pos.create")
    identity: Identity
    authz: AuthorizationEvaluator
    checkout_service: CheckoutService

    async def run(self, cmd: RemoveFromCart) -> CartSummary:
        txn = await self.checkout_service.remove_item(cmd.transaction_id, cmd.item_id)
        return CartSummary.of(txn, self.checkout_service.currency_symbol)


class AttachCustomerHandler(CommandHandler[AttachCustomer, CartSummary]):
    __auth__ = requires("pos.create")
    identity: Identity
    authz: AuthorizationEvaluator
    checkout_service: CheckoutService

    async def run(self, cmd: AttachCustomer) -> CartSummary:
        txn = await self.checkout_service.attach_customer(cmd.transaction_id, cmd.customer_id)
        return CartSummary.of(txn, self.checkout_service.currency_symbol)


class SetLineDiscountHandler(CommandHandler[SetLineDiscount, CartSummary]):
    __auth__ = requires("pos.create")
    identity: Identity
    authz: AuthorizationEvaluator
    checkout_service: CheckoutService

    async def run(self, cmd: SetLineDiscount) -> CartSummary:
        txn = await self.checkout_service.set_discount(cmd.transaction_id, cmd.item_id, cmd.percent)
        return CartSummary.of(txn, self.checkout_service.currency_symbol)
