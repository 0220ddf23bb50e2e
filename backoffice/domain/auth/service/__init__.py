"""Auth domain services."""

from .authorization import AuthorizationEvaluator
from .session import SessionService

__all__ = ["AuthorizationEvaluator", "SessionService"]
