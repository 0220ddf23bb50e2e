"""User: a dashboard account as the users API reports it."""

from typing import Any

from pydantic import model_validator

from backoffice.domain.auth.model.actor import Actor
from backoffice.domain.shared.model.value import CamelValueObject


class User(CamelValueObject):
    id: str
    email: str
    name: str
    role: str | None = None
    avatar: str | None = None

    @model_validator(mode="before")
    @classmethod
    def role_from_admin_flag(cls, data: Any) -> Any:
        # Older API versions send isAdmin instead of a role id
        if isinstance(data, dict) and "isAdmin" in data and not data.get("role"):
            data = {**data, "role": "admin" if data["isAdmin"] else "editor"}
        return data

    def to_actor(self) -> Actor:
        return Actor(
            id=self.id,
            email=self.email,
            name=self.name,
            role=self.role,
            avatar=self.avatar,
        )
