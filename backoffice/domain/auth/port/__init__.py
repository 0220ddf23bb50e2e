"""Auth domain ports."""

from .session_store import SessionStore
from .user_directory import UserDirectory

__all__ = ["SessionStore", "UserDirectory"]
