"""Error Hierarchy: typed, categorized exceptions for every account failure mode.

Invariants:
    - Every error has a code (str), kind (FailureKind), category (ErrorCategory), severity
    - kind is the only field the classifier reads to pick a transport status
    - message is user-facing and passed through verbatim; never carries secrets or hashes
    - to_response() produces the REST envelope

Design Decisions:
    - Single hierarchy with AccountsError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - kind separate from category: category is the observability taxonomy, kind is the
      coarse transport contract (not-found and unprocessable collapse to one kind)
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
    """High-level error categories for logging and dashboards."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    UNAUTHORIZED = "unauthorized"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class FailureKind(str, Enum):
    """Machine-readable failure kind consumed by the error classifier."""
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND_OR_UNPROCESSABLE = "not_found_or_unprocessable"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability. Never serialized to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class AccountsError(Exception):
    """Base exception for all account failures (the typed failure)."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: FailureKind,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "kind": self.kind.value,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Input Errors ────────────────────────────────────────────────

class RequestValidationFailure(AccountsError):
    """Request body failed the per-operation schema check."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "VALIDATION_ERROR", FailureKind.VALIDATION,
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, ctx,
        )
        self.field = field


# ─── Business Rule Errors ────────────────────────────────────────

class UnknownUserError(AccountsError):
    """No user exists with the requested id."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            "Unknown user", "UNKNOWN_USER",
            FailureKind.NOT_FOUND_OR_UNPROCESSABLE,
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, ctx,
        )


class EmailAlreadyTakenError(AccountsError):
    """Another user already owns the email address."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "EMAIL_ALREADY_TAKEN", "EMAIL_ALREADY_TAKEN",
            FailureKind.NOT_FOUND_OR_UNPROCESSABLE,
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, context,
        )


class PasswordMismatchError(AccountsError):
    """Password and its confirmation differ."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "password not same", "PASSWORD_NOT_SAME",
            FailureKind.NOT_FOUND_OR_UNPROCESSABLE,
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, context,
        )


class PasswordLengthError(AccountsError):
    """New password is outside the allowed length bounds."""
    def __init__(
        self, min_length: int, max_length: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"New password length must be between {min_length} "
            f"and {max_length} characters",
            "PASSWORD_LENGTH", FailureKind.NOT_FOUND_OR_UNPROCESSABLE,
            ErrorCategory.BUSINESS_RULE, ErrorSeverity.WARNING, context,
        )


class InvalidOldPasswordError(AccountsError):
    """Supplied current password does not match the stored hash."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid old password", "INVALID_OLD_PASSWORD",
            FailureKind.UNAUTHORIZED, ErrorCategory.UNAUTHORIZED,
            ErrorSeverity.WARNING, context,
        )


class PersistenceFailedError(AccountsError):
    """Store reported that a write did not apply (e.g. no such row)."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to {action}", "PERSISTENCE_FAILED",
            FailureKind.NOT_FOUND_OR_UNPROCESSABLE,
            ErrorCategory.DATABASE, ErrorSeverity.ERROR, context,
        )
        self.action = action


# ─── Infrastructure Errors ───────────────────────────────────────

class DatabaseError(AccountsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", FailureKind.INTERNAL, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation
