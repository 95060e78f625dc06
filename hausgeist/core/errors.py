"""Error types and classification utilities for command and rule execution."""

from enum import Enum, StrEnum
from typing import Literal

from pydantic import BaseModel


class ParseError(Exception):
    """Raised when a chat message matches none of the known intents."""

    def __init__(self, original_message: str) -> None:
        super().__init__(f'Could not understand: "{original_message}"')
        self.original_message = original_message


class StoreErrorCode(StrEnum):
    """Operation labels attached to task store failures."""

    CREATE_FAILED = "CREATE_FAILED"
    GET_FAILED = "GET_FAILED"
    UPDATE_FAILED = "UPDATE_FAILED"
    DELETE_FAILED = "DELETE_FAILED"
    QUERY_FAILED = "QUERY_FAILED"
    NOT_INITIALIZED = "NOT_INITIALIZED"


class TaskStoreError(Exception):
    """Raised when a create/read/update/query against the task store fails."""

    def __init__(self, message: str, code: StoreErrorCode) -> None:
        super().__init__(message)
        self.code = code


class RuleConfigError(Exception):
    """Raised when the rules document exists but cannot be turned into rules."""


class ErrorCategory(Enum):
    """Categories of errors that can occur while handling a message."""

    STORE_UNAVAILABLE = "store_unavailable"
    STORE_OPERATION_FAILED = "store_operation_failed"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    category: ErrorCategory
    message: str
    suggestion: str
    severity: ErrorSeverity


_ERROR_PATTERNS: dict[Literal["network", "locked"], dict[str, list[str] | set[str]]] = {
    "network": {
        "phrases": ["connection", "timeout", "network", "unreachable"],
        "exception_types": {"ConnectionError", "TimeoutError"},
    },
    "locked": {
        "phrases": ["database is locked", "unable to open database", "no such table"],
        "exception_types": set(),
    },
}


def _match_error_pattern(*, error_str: str, exception_type: str, pattern_type: Literal["network", "locked"]) -> bool:
    """Return True if the error matches the configured pattern type."""
    patterns = _ERROR_PATTERNS[pattern_type]
    return any(phrase in error_str for phrase in patterns["phrases"]) or exception_type in patterns["exception_types"]


def classify_error(exception: Exception) -> ErrorResponse:
    """Classify a failure raised while handling a message.

    Args:
        exception: The exception raised during execution

    Returns:
        ErrorResponse with category, message, suggestion, and severity
    """
    error_str = str(exception).lower()
    exception_type = type(exception).__name__

    if isinstance(exception, TaskStoreError):
        if exception.code == StoreErrorCode.NOT_INITIALIZED or _match_error_pattern(
            error_str=error_str, exception_type=exception_type, pattern_type="locked"
        ):
            return ErrorResponse(
                category=ErrorCategory.STORE_UNAVAILABLE,
                message="The task database is not available.",
                suggestion="Run `hausgeist init-db` and try again.",
                severity=ErrorSeverity.HIGH,
            )
        return ErrorResponse(
            category=ErrorCategory.STORE_OPERATION_FAILED,
            message=f"The task database rejected the request ({exception.code}).",
            suggestion="Please try again in a moment.",
            severity=ErrorSeverity.MEDIUM,
        )

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="network"):
        return ErrorResponse(
            category=ErrorCategory.NETWORK_ERROR,
            message="Network error occurred.",
            suggestion="Please check your connection and try again.",
            severity=ErrorSeverity.MEDIUM,
        )

    return ErrorResponse(
        category=ErrorCategory.UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later.",
        severity=ErrorSeverity.MEDIUM,
    )
