"""Session service: login/logout bookkeeping for dashboard actors."""

import logging

from backoffice.domain.auth.model.actor import Actor
from backoffice.domain.auth.model.session import Session
from backoffice.domain.auth.port.session_store import SessionStore
from backoffice.domain.shared.error import ConflictError, ValidationError
from backoffice.domain.shared.service import Service

logger = logging.getLogger(__name__)


class SessionService(Service):
    """Binds actors to client tokens. An actor exists only while logged in."""

    session_store: SessionStore

    async def login(self, actor: Actor, token: str) -> Session:
        """Bind the actor to a fresh token.

        A token already bound to a session is never rebound: the holder must
        log out first. Raises ConflictError otherwise.
        """
        if not token or not token.strip():
            raise ValidationError("Session token must not be blank", field="token")
        if await self.session_store.get(token) is not None:
            raise ConflictError("Session token is already in use", code="token_in_use")
        session = Session(token=token, actor=actor)
        await self.session_store.save(session)
        logger.info("Session started: actor=%s role=%s", actor.id, actor.role)
        return session

    async def logout(self, token: str) -> bool:
        """End the session. Returns False if there was no such session."""
        ended = await self.session_store.delete(token)
        if ended:
            logger.info("Session ended")
        return ended

    async def current(self, token: str | None) -> Actor | None:
        """The actor behind a token, or None for a missing/unknown token."""
        if not token:
            return None
        session = await self.session_store.get(token)
        if session is None or not session.is_authenticated:
            return None
        return session.actor
