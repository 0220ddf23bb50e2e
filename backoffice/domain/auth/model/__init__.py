"""Auth domain models."""

from .actor import Actor
from .identity import Anonymous, Identity
from .permission import Permission
from .rbac import DEFAULT_RBAC_TABLE, RBACTable
from .role import Role
from .session import Session, SessionToken
from .user import User

__all__ = [
    "Actor",
    "Anonymous",
    "DEFAULT_RBAC_TABLE",
    "Identity",
    "Permission",
    "RBACTable",
    "Role",
    "Session",
    "SessionToken",
    "User",
]
