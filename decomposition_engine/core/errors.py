"""Error Hierarchy — typed, categorized exceptions for decomposition failures.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - All errors are raised BEFORE any store write: a failed action is a true no-op
    - to_envelope() produces the tool-result failure shape {status: failed, error, errorCode},
      the only failure shape callers ever see (dispatcher and HTTP layer alike)

Design Decisions:
    - Single hierarchy with DecompositionError base: dispatcher catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    BUSINESS_RULE = "business_rule"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where the error surfaced: filled in by the dispatcher before logging."""
    session_id: str | None = None
    action: str | None = None


class DecompositionError(Exception):
    """Base exception for all decomposition engine errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_envelope(self) -> dict:
        """Convert to the tool-result failure envelope."""
        return {
            "status": "failed",
            "error": self.message,
            "errorCode": self.code,
        }


# ─── Domain Errors ──────────────────────────────────────────────

class ToolValidationError(DecompositionError):
    """Action payload is malformed, missing a field, or out of range."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class UnknownActionError(DecompositionError):
    """Action name is not registered with the dispatcher."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown action: {action}",
            "UNKNOWN_ACTION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.action = action


class ResourceNotFoundError(DecompositionError):
    """Referenced problem, component, dependency or phase does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} with ID {resource_id} does not exist",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AlreadyExistsError(DecompositionError):
    """Create action reused an identifier that is already taken."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} with ID {resource_id} already exists",
            "ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class CycleDetectedError(DecompositionError):
    """Adding source -> target would close a dependency cycle."""
    def __init__(
        self, source_id: str, target_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cannot create circular dependency: {target_id} already "
            f"depends on {source_id}",
            "CYCLE_DETECTED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.source_id = source_id
        self.target_id = target_id
