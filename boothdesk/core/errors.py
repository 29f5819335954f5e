"""Error types and error classification for store and task operations."""

from enum import Enum

from pydantic import BaseModel


class StoreError(Exception):
    """Base class for failures talking to the record store."""


class StoreReadError(StoreError):
    """A fetch from the store failed (network, missing table, bad query)."""


class StoreWriteError(StoreError):
    """An append to the store failed."""


class TaskCompletionError(StoreWriteError):
    """The two-step completion of a task failed.

    ``completion_recorded`` tells whether the completion activity was already
    appended before the failure. When True the task is durably completed and
    only its report entry is missing, so the whole command must not be retried.
    """

    def __init__(self, message: str, *, completion_recorded: bool) -> None:
        super().__init__(message)
        self.completion_recorded = completion_recorded


class TaskNotFoundError(KeyError):
    """No pending task with the requested id exists for the staff member."""


class CheckinError(ValueError):
    """Booth code / personal code combination was rejected."""


class ActivityOrderError(ValueError):
    """Activity log handed to reconciliation is not ordered newest first."""


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Store errors
    ERR_STORE_READ_FAILED = "ERR_STORE_READ_FAILED"
    ERR_STORE_WRITE_FAILED = "ERR_STORE_WRITE_FAILED"

    # Task errors
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_TASK_NOT_COMPLETED = "ERR_TASK_NOT_COMPLETED"
    ERR_TASK_NOT_REPORTED = "ERR_TASK_NOT_REPORTED"
    ERR_INVALID_TASK = "ERR_INVALID_TASK"

    # Check-in errors
    ERR_INVALID_CHECKIN = "ERR_INVALID_CHECKIN"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity
    completion_recorded: bool | None = None


def classify_error_with_response(exception: Exception) -> ErrorResponse:  # noqa: PLR0911
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised during execution

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, TaskCompletionError):
        if exception.completion_recorded:
            return ErrorResponse(
                code=ErrorCode.ERR_TASK_NOT_REPORTED,
                message="The task was completed but its report could not be saved.",
                suggestion="Do not complete the task again. Submit the report manually if needed.",
                severity=ErrorSeverity.MEDIUM,
                completion_recorded=True,
            )
        return ErrorResponse(
            code=ErrorCode.ERR_TASK_NOT_COMPLETED,
            message="The task could not be completed.",
            suggestion="The task is still pending. Please try again.",
            severity=ErrorSeverity.HIGH,
            completion_recorded=False,
        )

    if isinstance(exception, TaskNotFoundError):
        return ErrorResponse(
            code=ErrorCode.ERR_TASK_NOT_FOUND,
            message="I couldn't find that pending task.",
            suggestion="Refresh the task list; it may already be completed.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, CheckinError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_CHECKIN,
            message=str(exception),
            suggestion="Check the booth code and personal code and try again.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, StoreWriteError):
        return ErrorResponse(
            code=ErrorCode.ERR_STORE_WRITE_FAILED,
            message="The change could not be saved.",
            suggestion="Please try again in a moment.",
            severity=ErrorSeverity.HIGH,
        )

    if isinstance(exception, StoreReadError):
        return ErrorResponse(
            code=ErrorCode.ERR_STORE_READ_FAILED,
            message="Data could not be loaded.",
            suggestion="Please try again in a moment.",
            severity=ErrorSeverity.MEDIUM,
        )

    if isinstance(exception, ValueError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_TASK,
            message=str(exception),
            suggestion="Correct the task fields and try again.",
            severity=ErrorSeverity.LOW,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
