from datetime import UTC, datetime
from typing import NewType

from pydantic import Field

from backoffice.domain.auth.model.actor import Actor
from backoffice.domain.shared.model.value import ValueObject

# Client-held token identifying a session; empty for anonymous callers
SessionToken = NewType("SessionToken", str)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Session(ValueObject):
    """A logged-in actor bound to a client session token."""

    token: str
    actor: Actor
    created_at: datetime = Field(default_factory=_utc_now)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)
