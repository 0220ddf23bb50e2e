from unittest.mock import AsyncMock

import pytest

from backoffice.domain.auth.model.session import Session
from backoffice.domain.auth.service.session import SessionService
from backoffice.domain.shared.error import ConflictError, ValidationError
from backoffice.infrastructure.memory.repository import InMemorySessionStore
from tests.unit.factories import make_actor


def _make_service() -> SessionService:
    return SessionService(session_store=InMemorySessionStore())


class TestSessionService:
    @pytest.mark.asyncio
    async def test_login_then_current(self) -> None:
        service = _make_service()
        actor = make_actor("manager")

        session = await service.login(actor, "tok-1")

        assert session.is_authenticated
        assert await service.current("tok-1") == actor

    @pytest.mark.asyncio
    async def test_blank_token_rejected(self) -> None:
        store = AsyncMock()
        service = SessionService(session_store=store)

        with pytest.raises(ValidationError):
            await service.login(make_actor(), "   ")
        store.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_live_token_is_not_rebound(self) -> None:
        service = _make_service()
        owner = make_actor("viewer", actor_id="owner")
        await service.login(owner, "tok-1")

        with pytest.raises(ConflictError):
            await service.login(make_actor("super_admin", actor_id="intruder"), "tok-1")

        assert await service.current("tok-1") == owner

    @pytest.mark.asyncio
    async def test_token_reusable_after_logout(self) -> None:
        service = _make_service()
        await service.login(make_actor(actor_id="first"), "tok-1")
        await service.logout("tok-1")

        session = await service.login(make_actor(actor_id="second"), "tok-1")

        assert session.actor.id == "second"

    @pytest.mark.asyncio
    async def test_logout_ends_session(self) -> None:
        service = _make_service()
        await service.login(make_actor(), "tok-1")

        assert await service.logout("tok-1") is True
        assert await service.current("tok-1") is None

    @pytest.mark.asyncio
    async def test_logout_unknown_token(self) -> None:
        assert await _make_service().logout("never-issued") is False

    @pytest.mark.asyncio
    async def test_current_without_token(self) -> None:
        service = _make_service()
        assert await service.current(None) is None
        assert await service.current("") is None

    @pytest.mark.asyncio
    async def test_current_reads_store(self) -> None:
        actor = make_actor("viewer")
        store = AsyncMock()
        store.get.return_value = Session(token="tok-9", actor=actor)

        assert await SessionService(session_store=store).current("tok-9") == actor
        store.get.assert_awaited_once_with("tok-9")
