"""Startup validation for handler authorization declarations."""

import logging

from backoffice.domain.shared.authorization.gate import Gate
from backoffice.domain.shared.command import CommandHandler
from backoffice.domain.shared.error import ConfigurationError
from backoffice.domain.shared.query import QueryHandler

logger = logging.getLogger(__name__)


def _all_subclasses(cls: type, package: str) -> list[type]:
    """Handler subclasses defined under the given package."""
    found: list[type] = []
    for sub in cls.__subclasses__():
        if sub.__module__.startswith(package):
            found.append(sub)
        found.extend(_all_subclasses(sub, package))
    return found


def _check_handler_class(handler_cls: type) -> None:
    """Raise ConfigurationError if the handler lacks a Gate in __auth__."""
    if not isinstance(getattr(handler_cls, "__auth__", None), Gate):
        raise ConfigurationError(f"Handler {handler_cls.__name__} has no __auth__ declaration")


def validate_all_handlers(
    known_permissions: set[str] | None = None,
    package: str = "backoffice.",
) -> None:
    """Scan all registered CommandHandler and QueryHandler subclasses.

    When ``known_permissions`` is given, gates naming a permission outside it
    are reported too. Raises ConfigurationError listing every violation.
    """
    violations: list[str] = []

    for handler_cls in _all_subclasses(CommandHandler, package) + _all_subclasses(
        QueryHandler, package
    ):
        try:
            _check_handler_class(handler_cls)
        except ConfigurationError as e:
            violations.append(str(e))
            continue

        if known_permissions is not None:
            gate = handler_cls.__auth__
            named = getattr(gate, "permissions", None) or (
                (gate.permission,) if hasattr(gate, "permission") else ()
            )
            unknown = [p for p in named if p not in known_permissions]
            if unknown:
                violations.append(
                    f"Handler {handler_cls.__name__} gates on undefined permissions {unknown}"
                )

    if violations:
        raise ConfigurationError(
            f"Authorization validation failed for {len(violations)} handler(s):\n"
            + "\n".join(f"  - {v}" for v in violations)
        )

    logger.info("Authorization startup validation passed for all handlers")
