"""Error Hierarchy — typed, categorized exceptions for all Event Pulse failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Grammar and construction errors (400-level) are the caller's to fix; storage errors are critical
    - to_response() produces the REST envelope
    - No retries anywhere in core: every error propagates to the caller unchanged

Design Decisions:
    - Single hierarchy with EventPulseError base: FastAPI global handler catches all (uniform error shape)
    - ErrorContext as dataclass: carries the offending raw input without coupling to logging
    - Length-carrying errors expose `length` so callers can report the exact byte count
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
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity_id: str | None = None
    raw_input: str | None = None
    debug_info: dict[str, Any] | None = None


class EventPulseError(Exception):
    """Base exception for all Event Pulse errors."""

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
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "entity_id": self.context.entity_id,
                    "raw_input": self.context.raw_input,
                },
            }
        }


# ─── Grammar Errors (400-level) ─────────────────────────────────

class InvalidInputStringError(EventPulseError):
    """Malformed textual grammar: wrong segment count or unrecognized unit."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid string format: {message}",
            "INVALID_INPUT_STRING", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class ParseError(EventPulseError):
    """A numeric sub-field failed integer parsing."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Parse error: {message}",
            "PARSE_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Identifier Errors (400-level) ──────────────────────────────

class InvalidPrefixError(EventPulseError):
    """Identifier prefix is empty or longer than 4 bytes."""
    def __init__(self, length: int, context: ErrorContext | None = None):
        super().__init__(
            f"Identifier prefix must be 1-4 bytes, got {length}",
            "INVALID_PREFIX", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.length = length


class InvalidEncodingError(EventPulseError):
    """Identifier prefix is not single-byte ASCII."""
    def __init__(self, prefix: str, context: ErrorContext | None = None):
        super().__init__(
            f"Identifier prefix must be ASCII, got {prefix!r}",
            "INVALID_ENCODING", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.prefix = prefix


class InvalidLengthError(EventPulseError):
    """Identifier byte buffer is not exactly 12 bytes."""
    def __init__(self, length: int, context: ErrorContext | None = None):
        super().__init__(
            f"Identifier must be exactly 12 bytes, got {length}",
            "INVALID_LENGTH", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.length = length


# ─── Calendar Errors (422) ──────────────────────────────────────

class CalendarConstructionError(EventPulseError):
    """A computed date or time-of-day does not exist on the calendar (e.g. Feb 30)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CALENDAR_CONSTRUCTION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 422,
        )


# ─── Shell Errors ───────────────────────────────────────────────

class ResourceNotFoundError(EventPulseError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING,
            context or ErrorContext(entity_id=resource_id), 404,
        )


class DatabaseError(EventPulseError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
