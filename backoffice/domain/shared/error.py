"""Error hierarchy for backoffice.

Error layers:
- BackofficeError: Base class for all backoffice errors
- DomainError: Business rule violations, rejected user actions (recoverable)
- InfrastructureError: System-level failures like API/storage issues

Every domain error is local to a single user action: the operation that raised
it has not changed any state, so callers surface a notification and carry on.
"""

from decimal import Decimal


class BackofficeError(Exception):
    """Base class for all backoffice errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations)
# =============================================================================


class DomainError(BackofficeError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class ConflictError(DomainError):
    """Resource already exists or version conflict."""


class AuthorizationError(DomainError):
    """Actor not authorized for this operation."""


class InsufficientStockError(DomainError):
    """Cart mutation would exceed the item's available stock."""

    def __init__(self, item_id: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for item {item_id}: requested {requested}, available {available}",
            code="insufficient_stock",
        )
        self.item_id = item_id
        self.requested = requested
        self.available = available


class InvalidPaymentError(DomainError):
    """Payment method missing or cash tendered below the total."""

    def __init__(
        self,
        message: str,
        code: str = "invalid_payment",
        shortfall: Decimal | None = None,
    ) -> None:
        super().__init__(message, code=code)
        self.shortfall = shortfall


# =============================================================================
# Infrastructure Errors (system-level failures)
# =============================================================================


class InfrastructureError(BackofficeError):
    """Base class for infrastructure/system errors."""


class ExternalServiceError(InfrastructureError):
    """External service (REST API) is unavailable or failed."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
