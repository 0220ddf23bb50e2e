"""Actor: the authenticated dashboard user behind a session."""

from dataclasses import dataclass

from backoffice.domain.auth.model.identity import Identity


@dataclass(frozen=True)
class Actor(Identity):
    """The authenticated identity of the current requester.

    Holds a single role identifier. The role is resolved against the RBAC
    table on every check, so an actor whose role is missing from the table
    is simply denied everything.
    """

    id: str
    email: str
    name: str
    role: str | None = None
    avatar: str | None = None
