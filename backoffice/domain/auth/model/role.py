"""Role: a named tier granting an explicit set of permissions."""

from pydantic import Field

from backoffice.domain.shared.model.value import ValueObject


class Role(ValueObject):
    """A statically defined role.

    ``level`` orders roles (higher = more privileged). Permission checks only
    consult it when level inheritance is switched on; otherwise the
    ``permissions`` set is the whole story.
    """

    id: str
    name: str
    description: str = ""
    level: int = Field(ge=0)
    permissions: frozenset[str] = frozenset()

    def grants(self, permission_id: str) -> bool:
        return permission_id in self.permissions
