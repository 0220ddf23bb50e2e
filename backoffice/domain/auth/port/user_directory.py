"""Port for checking dashboard credentials."""

from abc import abstractmethod
from typing import Protocol

from backoffice.domain.auth.model.user import User
from backoffice.domain.shared.port import Port


class UserDirectory(Port, Protocol):
    """Source of truth for accounts and their roles."""

    @abstractmethod
    async def authenticate(self, email: str, password: str) -> User | None:
        """The account for these credentials, or None if they are wrong."""
        ...
