"""Permission: a single ``resource.action`` capability."""

import re

from pydantic import model_validator
from typing_extensions import Self

from backoffice.domain.shared.model.value import ValueObject

PERMISSION_ID_PATTERN = re.compile(r"^[a-z][a-z0-9_]*\.[a-z][a-z0-9_]*$")


class Permission(ValueObject):
    """A named capability, e.g. ``inventory.delete``.

    The id is always ``f"{resource}.{action}"``.
    """

    id: str
    name: str
    description: str = ""
    resource: str
    action: str

    @model_validator(mode="after")
    def check_id_matches_parts(self) -> Self:
        if not PERMISSION_ID_PATTERN.match(self.id):
            raise ValueError(f"Invalid permission id (expected resource.action): {self.id}")
        if self.id != f"{self.resource}.{self.action}":
            raise ValueError(
                f"Permission id {self.id} does not match resource/action "
                f"{self.resource}/{self.action}"
            )
        return self

    @classmethod
    def define(cls, permission_id: str, name: str, description: str = "") -> "Permission":
        """Build a permission from its id, deriving resource and action."""
        resource, _, action = permission_id.partition(".")
        return cls(
            id=permission_id,
            name=name,
            description=description,
            resource=resource,
            action=action,
        )
