from backoffice.util.di.base import Provider, get_provider
from backoffice.util.di.scope import Scope

__all__ = ["Provider", "Scope", "get_provider"]
