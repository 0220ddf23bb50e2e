"""Repository port for Session persistence."""

from abc import abstractmethod
from typing import Protocol

from backoffice.domain.auth.model.session import Session
from backoffice.domain.shared.port import Port


class SessionStore(Port, Protocol):
    """Store of live sessions keyed by client token."""

    @abstractmethod
    async def get(self, token: str) -> Session | None:
        """Get the session bound to a token."""
        ...

    @abstractmethod
    async def save(self, session: Session) -> None:
        """Save a session, replacing any session with the same token."""
        ...

    @abstractmethod
    async def delete(self, token: str) -> bool:
        """Delete a session. Returns True if deleted, False if not found."""
        ...
