"""Error Hierarchy — typed, categorized exceptions for all ColdFlow failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable by the caller; infrastructure
      errors (500-level) are fatal for the current call
    - ValidationFailedError carries the full ordered violation list, never just the first
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with ColdFlowError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Infrastructure errors are raised with `from e` so the driver cause stays on __cause__
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
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    transfer_id: str | None = None
    wallet_id: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class ColdFlowError(Exception):
    """Base exception for all ColdFlow errors."""

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

    def details(self) -> list[dict] | None:
        """Field-level details for the response envelope. None by default."""
        return None

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.context.user_message or self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "transfer_id": self.context.transfer_id,
                "wallet_id": self.context.wallet_id,
            },
        }
        details = self.details()
        if details is not None:
            body["details"] = details
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(ColdFlowError):
    """Cold transfer proposal violated one or more field rules."""
    def __init__(self, violations: list, context: ErrorContext | None = None):
        fields = ", ".join(v.field for v in violations)
        super().__init__(
            f"Cold transfer validation failed ({len(violations)} violation(s): {fields})",
            "VALIDATION_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.violations = list(violations)

    def details(self) -> list[dict]:
        return [v.to_dict() for v in self.violations]


class ResourceNotFoundError(ColdFlowError):
    """Requested wallet or transfer does not exist."""
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


class TypeMismatchError(ColdFlowError):
    """Entity exists but is not the cold-storage variant this workflow expects."""
    def __init__(
        self, resource_type: str, resource_id: str, actual_type: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' is not a cold storage "
            f"{resource_type.lower()} (type: {actual_type})",
            "TYPE_MISMATCH", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.actual_type = actual_type


class AmountParseError(ColdFlowError):
    """Monetary field could not be parsed as a decimal."""
    def __init__(self, raw_value: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid decimal amount: {raw_value!r}",
            "AMOUNT_PARSE_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.raw_value = raw_value


class ConcurrencyError(ColdFlowError):
    """Concurrent modification detected — caller must re-read and retry."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ColdFlowError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class NotificationError(ColdFlowError):
    """Outbound notification delivery failed."""
    def __init__(self, message: str, channel: str, context: ErrorContext | None = None):
        super().__init__(
            f"Notification via {channel} failed: {message}",
            "NOTIFICATION_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, context, 502,
        )
        self.channel = channel
