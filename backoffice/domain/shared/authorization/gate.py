"""Handler-level authorization gates: public(), authenticated() and permission requirements."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from backoffice.domain.auth.model.identity import Identity
    from backoffice.domain.auth.service.authorization import AuthorizationEvaluator

logger = logging.getLogger("backoffice.authz")


class Gate:
    """Base for handler-level authorization gates.

    Every CommandHandler/QueryHandler must declare ``__auth__: ClassVar[Gate]``.
    Subclasses answer ``allows`` with the evaluator's boolean verdict.
    """

    def allows(self, authz: AuthorizationEvaluator, identity: Identity | None) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Public(Gate):
    """No authentication required."""

    def allows(self, authz: AuthorizationEvaluator, identity: Identity | None) -> bool:
        return True


@dataclass(frozen=True)
class Authenticated(Gate):
    """Any logged-in actor, whatever its role."""

    def allows(self, authz: AuthorizationEvaluator, identity: Identity | None) -> bool:
        from backoffice.domain.auth.model.actor import Actor

        return isinstance(identity, Actor)


@dataclass(frozen=True)
class Requires(Gate):
    """Gate that requires a single permission."""

    permission: str

    def allows(self, authz: AuthorizationEvaluator, identity: Identity | None) -> bool:
        return authz.has_permission(identity, self.permission)


@dataclass(frozen=True)
class RequiresAny(Gate):
    """Gate that requires at least ONE of the permissions."""

    permissions: tuple[str, ...]

    def allows(self, authz: AuthorizationEvaluator, identity: Identity | None) -> bool:
        return authz.has_any_permission(identity, self.permissions)


@dataclass(frozen=True)
class RequiresAll(Gate):
    """Gate that requires ALL of the permissions."""

    permissions: tuple[str, ...]

    def allows(self, authz: AuthorizationEvaluator, identity: Identity | None) -> bool:
        return authz.has_all_permissions(identity, self.permissions)


_PUBLIC = Public()
_AUTHENTICATED = Authenticated()


def public() -> Public:
    """Mark a handler as publicly accessible (no auth required)."""
    return _PUBLIC


def authenticated() -> Authenticated:
    """Mark a handler as open to any logged-in actor."""
    return _AUTHENTICATED


def requires(permission: str) -> Requires:
    """Mark a handler as requiring the given permission."""
    return Requires(permission=permission)


def requires_any(*permissions: str) -> RequiresAny:
    return RequiresAny(permissions=permissions)


def requires_all(*permissions: str) -> RequiresAll:
    return RequiresAll(permissions=permissions)


def enforce(handler: Any) -> None:
    """Evaluate the handler class's ``__auth__`` gate against its identity.

    Raises AuthorizationError when denied, ConfigurationError when the
    handler is missing its gate or its evaluator.
    """
    from backoffice.domain.auth.model.actor import Actor
    from backoffice.domain.shared.error import AuthorizationError, ConfigurationError

    handler_name = type(handler).__name__
    gate = getattr(type(handler), "__auth__", None)
    if not isinstance(gate, Gate):
        raise ConfigurationError(f"Handler {handler_name} has no __auth__ declaration")

    if isinstance(gate, Public):
        return

    identity = getattr(handler, "identity", None)
    if not isinstance(identity, Actor):
        raise AuthorizationError("Authentication required", code="missing_token")

    authz = getattr(handler, "authz", None)
    if authz is None:
        raise ConfigurationError(f"Handler {handler_name} declares {gate} but has no authz")

    logger.debug(
        "Auth check: handler=%s, required=%s, actor=%s, role=%s",
        handler_name,
        gate,
        identity.id,
        identity.role,
    )
    if not gate.allows(authz, identity):
        logger.warning("Authorization denied: actor=%s handler=%s", identity.id, handler_name)
        raise AuthorizationError(
            f"Access denied: missing permission for {handler_name}",
            code="access_denied",
        )
