"""Error Hierarchy — typed, categorized exceptions for all intranet API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) carry a human-readable detail; server errors (500-level)
      carry a generic detail only
    - to_problem() produces the problem body {title, detail, status, code, instance}
    - Driver messages and tracebacks never reach the problem body

Design Decisions:
    - Single hierarchy with IntranetError base: the FastAPI global handler catches all
    - ErrorContext as dataclass: routing value / target name travel with the error for logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class ErrorKind(str, Enum):
    """Gateway failure kinds — logged on every failure path."""
    MALFORMED_PAYLOAD = "MalformedPayload"
    MISSING_ROUTING_FIELD = "MissingRoutingField"
    TARGET_NOT_FOUND = "TargetNotFound"
    BACKING_STORE_ERROR = "BackingStoreError"
    UNCLASSIFIED_ERROR = "UnclassifiedError"


GENERIC_GATEWAY_DETAIL = "An error occurred during the generic operation."


@dataclass
class ErrorContext:
    """Context carried by an error for logging (never serialized to clients)."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    routing_value: str | None = None
    target_name: str | None = None
    debug_info: dict[str, Any] | None = None


class IntranetError(Exception):
    """Base exception for all intranet API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        title: str = "Internal Server Error",
        kind: ErrorKind | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.title = title
        self.kind = kind

    def to_problem(self, instance: str | None = None) -> dict:
        """Convert to the problem-details response body."""
        problem = {
            "title": self.title,
            "detail": self.message,
            "status": self.http_status,
            "code": self.code,
        }
        if instance:
            problem["instance"] = instance
        return problem


# ─── Gateway Client Errors (400-level) ──────────────────────────

class MalformedPayloadError(IntranetError):
    """Request body is not valid JSON or not a JSON object."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            reason, "MALFORMED_PAYLOAD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
            title="Bad Request", kind=ErrorKind.MALFORMED_PAYLOAD,
        )


class MissingRoutingFieldError(IntranetError):
    """Routing field absent, blank, or not a string."""
    def __init__(self, field_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Routing field '{field_name}' is required to determine the "
            f"stored procedure.",
            "MISSING_ROUTING_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
            title="Bad Request", kind=ErrorKind.MISSING_ROUTING_FIELD,
        )
        self.field_name = field_name


class TargetNotFoundError(IntranetError):
    """Derived procedure is unknown locally or missing on the backing store."""
    def __init__(self, target_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.target_name = target_name
        super().__init__(
            f"Invalid API Call: The target '{target_name}' was not found.",
            "TARGET_NOT_FOUND", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
            title="Invalid API Call", kind=ErrorKind.TARGET_NOT_FOUND,
        )
        self.target_name = target_name


# ─── Entity Errors ──────────────────────────────────────────────

class ResourceNotFoundError(IntranetError):
    """Requested entity does not exist."""
    def __init__(
        self, resource_type: str, resource_id: int | str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} with ID {resource_id} not found.",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
            title="Not Found",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class BackingStoreError(IntranetError):
    """Database operation failed (timeout, constraint, connectivity...)."""
    def __init__(
        self, operation: str, context: ErrorContext | None = None,
        detail: str = GENERIC_GATEWAY_DETAIL,
    ):
        super().__init__(
            detail, "BACKING_STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
            kind=ErrorKind.BACKING_STORE_ERROR,
        )
        self.operation = operation


class UnclassifiedGatewayError(IntranetError):
    """Unexpected failure inside the gateway pipeline."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            GENERIC_GATEWAY_DETAIL, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
            kind=ErrorKind.UNCLASSIFIED_ERROR,
        )
