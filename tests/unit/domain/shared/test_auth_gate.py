"""Tests for handler __auth__ gate: metaclass wraps run() with the evaluator check."""

import pytest

from backoffice.domain.auth.model.identity import Anonymous, Identity
from backoffice.domain.auth.model.rbac import DEFAULT_RBAC_TABLE
from backoffice.domain.auth.service.authorization import AuthorizationEvaluator
from backoffice.domain.shared.authorization.gate import (
    authenticated,
    public,
    requires,
    requires_all,
    requires_any,
)
from backoffice.domain.shared.command import Command, CommandHandler, Result
from backoffice.domain.shared.error import AuthorizationError, ConfigurationError
from backoffice.domain.shared.query import Query, QueryHandler
from backoffice.domain.shared.query import Result as QueryResult
from tests.unit.factories import make_actor


def _make_authz() -> AuthorizationEvaluator:
    return AuthorizationEvaluator(rbac=DEFAULT_RBAC_TABLE)


# --- Test command DTOs ---


class DeleteItemCommand(Command):
    value: str = "test"


class DeleteItemResult(Result):
    value: str


class PublicCommand(Command):
    value: str = "test"


class PublicResult(Result):
    value: str


# --- Test handlers ---


class DeleteItemHandler(CommandHandler[DeleteItemCommand, DeleteItemResult]):
    __auth__ = requires("inventory.delete")
    identity: Identity
    authz: AuthorizationEvaluator

    async def run(self, cmd: DeleteItemCommand) -> DeleteItemResult:
        return DeleteItemResult(value=cmd.value)


class BrowseHandler(CommandHandler[DeleteItemCommand, DeleteItemResult]):
    __auth__ = requires_any("inventory.delete", "inventory.view")
    identity: Identity
    authz: AuthorizationEvaluator

    async def run(self, cmd: DeleteItemCommand) -> DeleteItemResult:
        return DeleteItemResult(value=cmd.value)


class ManageHandler(CommandHandler[DeleteItemCommand, DeleteItemResult]):
    __auth__ = requires_all("inventory.view", "inventory.delete")
    identity: Identity
    authz: AuthorizationEvaluator

    async def run(self, cmd: DeleteItemCommand) -> DeleteItemResult:
        return DeleteItemResult(value=cmd.value)


class PublicHandler(CommandHandler[PublicCommand, PublicResult]):
    __auth__ = public()

    async def run(self, cmd: PublicCommand) -> PublicResult:
        return PublicResult(value=cmd.value)


class SignedInHandler(CommandHandler[PublicCommand, PublicResult]):
    __auth__ = authenticated()
    identity: Identity
    authz: AuthorizationEvaluator

    async def run(self, cmd: PublicCommand) -> PublicResult:
        return PublicResult(value=cmd.value)


class UnprotectedHandler(CommandHandler[PublicCommand, PublicResult]):
    async def run(self, cmd: PublicCommand) -> PublicResult:
        return PublicResult(value=cmd.value)


class NoEvaluatorHandler(CommandHandler[PublicCommand, PublicResult]):
    __auth__ = requires("pos.view")
    identity: Identity

    async def run(self, cmd: PublicCommand) -> PublicResult:
        return PublicResult(value=cmd.value)


# --- Tests ---


class TestAuthGateOnCommandHandler:
    @pytest.mark.asyncio
    async def test_requires_rejects_viewer(self) -> None:
        handler = DeleteItemHandler(identity=make_actor("viewer"), authz=_make_authz())

        with pytest.raises(AuthorizationError) as exc_info:
            await handler.run(DeleteItemCommand())
        assert exc_info.value.code == "access_denied"

    @pytest.mark.asyncio
    async def test_requires_allows_admin(self) -> None:
        handler = DeleteItemHandler(identity=make_actor("admin"), authz=_make_authz())

        result = await handler.run(DeleteItemCommand(value="hello"))
        assert result.value == "hello"

    @pytest.mark.asyncio
    async def test_anonymous_is_rejected_with_missing_token(self) -> None:
        handler = DeleteItemHandler(identity=Anonymous(), authz=_make_authz())

        with pytest.raises(AuthorizationError) as exc_info:
            await handler.run(DeleteItemCommand())
        assert exc_info.value.code == "missing_token"

    @pytest.mark.asyncio
    async def test_missing_identity_is_rejected(self) -> None:
        handler = DeleteItemHandler.__new__(DeleteItemHandler)

        with pytest.raises(AuthorizationError):
            await handler.run(DeleteItemCommand())

    @pytest.mark.asyncio
    async def test_unknown_role_is_rejected(self) -> None:
        handler = DeleteItemHandler(identity=make_actor("janitor"), authz=_make_authz())

        with pytest.raises(AuthorizationError):
            await handler.run(DeleteItemCommand())

    @pytest.mark.asyncio
    async def test_requires_any_allows_viewer(self) -> None:
        handler = BrowseHandler(identity=make_actor("viewer"), authz=_make_authz())

        result = await handler.run(DeleteItemCommand(value="ok"))
        assert result.value == "ok"

    @pytest.mark.asyncio
    async def test_requires_all_rejects_editor(self) -> None:
        handler = ManageHandler(identity=make_actor("editor"), authz=_make_authz())

        with pytest.raises(AuthorizationError):
            await handler.run(DeleteItemCommand())

    @pytest.mark.asyncio
    async def test_requires_all_allows_admin(self) -> None:
        handler = ManageHandler(identity=make_actor("admin"), authz=_make_authz())

        result = await handler.run(DeleteItemCommand(value="ok"))
        assert result.value == "ok"

    @pytest.mark.asyncio
    async def test_public_handler_skips_check(self) -> None:
        handler = PublicHandler()

        result = await handler.run(PublicCommand(value="public"))
        assert result.value == "public"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", ["viewer", "super_admin", "janitor", None])
    async def test_authenticated_allows_any_actor(self, role) -> None:
        handler = SignedInHandler(identity=make_actor(role), authz=_make_authz())

        result = await handler.run(PublicCommand(value="mine"))
        assert result.value == "mine"

    @pytest.mark.asyncio
    async def test_authenticated_rejects_anonymous(self) -> None:
        handler = SignedInHandler(identity=Anonymous(), authz=_make_authz())

        with pytest.raises(AuthorizationError) as exc_info:
            await handler.run(PublicCommand())
        assert exc_info.value.code == "missing_token"

    @pytest.mark.asyncio
    async def test_unprotected_handler_raises_configuration_error(self) -> None:
        handler = UnprotectedHandler()

        with pytest.raises(ConfigurationError, match="UnprotectedHandler"):
            await handler.run(PublicCommand())

    @pytest.mark.asyncio
    async def test_gate_without_evaluator_raises_configuration_error(self) -> None:
        handler = NoEvaluatorHandler(identity=make_actor("admin"))

        with pytest.raises(ConfigurationError, match="NoEvaluatorHandler"):
            await handler.run(PublicCommand())


# --- Test query DTOs and handlers ---


class DashboardQuery(Query):
    pass


class DashboardQueryResult(QueryResult):
    value: str


class DashboardQueryHandler(QueryHandler[DashboardQuery, DashboardQueryResult]):
    __auth__ = requires("dashboard.view")
    identity: Identity
    authz: AuthorizationEvaluator

    async def run(self, query: DashboardQuery) -> DashboardQueryResult:
        return DashboardQueryResult(value="stats")


class TestAuthGateOnQueryHandler:
    @pytest.mark.asyncio
    async def test_query_handler_allows_viewer(self) -> None:
        handler = DashboardQueryHandler(identity=make_actor("viewer"), authz=_make_authz())

        result = await handler.run(DashboardQuery())
        assert result.value == "stats"

    @pytest.mark.asyncio
    async def test_query_handler_rejects_role_without_permission(self) -> None:
        handler = DashboardQueryHandler(identity=make_actor(None), authz=_make_authz())

        with pytest.raises(AuthorizationError) as exc_info:
            await handler.run(DashboardQuery())
        assert exc_info.value.code == "access_denied"
