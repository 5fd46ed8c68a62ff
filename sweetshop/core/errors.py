"""Error Hierarchy — typed, categorized exceptions for all Sweet Shop failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are expected outcomes; infrastructure errors (500-level) are critical
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SweetShopError base: FastAPI global handler catches all (ADR: uniform error shape)
    - InsufficientStockError is a business outcome, not a defect: severity WARNING
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    sweet_id: str | None = None
    details: dict[str, Any] | None = None


class SweetShopError(Exception):
    """Base exception for all Sweet Shop errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": self.context.details,
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(SweetShopError):
    """Request data failed a domain rule (non-positive amount, bad price range...)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.details = {"field": field, **(ctx.details or {})}
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class InsufficientStockError(SweetShopError):
    """Purchase amount exceeds the quantity on hand."""
    def __init__(
        self, available: int, requested: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.details = {"available": available, "requested": requested}
        super().__init__(
            f"Insufficient quantity. Available: {available}",
            "INSUFFICIENT_STOCK", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.available = available
        self.requested = requested


class ResourceNotFoundError(SweetShopError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateResourceError(SweetShopError):
    """Unique field already taken (username, email)."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.details = {"field": field}
        super().__init__(
            f"{field.capitalize()} already exists",
            "DUPLICATE_RESOURCE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class AuthenticationError(SweetShopError):
    """Missing, invalid or expired credentials."""
    def __init__(
        self, message: str = "Invalid credentials", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(SweetShopError):
    """Authenticated user lacks the required role."""
    def __init__(self, required_role: str, context: ErrorContext | None = None):
        super().__init__(
            f"Requires role {required_role}",
            "PERMISSION_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.required_role = required_role


class ConcurrencyError(SweetShopError):
    """Concurrent modification detected and retries exhausted."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SweetShopError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
