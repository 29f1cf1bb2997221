"""Domain exceptions for the job board.

Defines domain-level exceptions independent of infrastructure concerns.
The presentation layer maps them to HTTP responses in exception handlers.
Each exception carries ``retriable``: whether the caller (e.g. a webhook
sender) may usefully retry the same request.
"""

from typing import Any


class JobBoardException(Exception):
    """Base exception for all job board application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
        retriable: Whether retrying the same input may succeed.
    """

    retriable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(JobBoardException):
    """Raised when input validation fails.

    Permanent: the same payload will never validate, so it is never retried.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize with message, optional field name and per-field errors.

        Args:
            message: Description of the validation failure.
            field: Optional dotted path of the field that failed validation.
            errors: Optional list of individual field errors.
        """
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if errors:
            details["errors"] = errors
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidArgumentException(JobBoardException):
    """Raised when a function receives an unusable argument (e.g. empty id)."""

    def __init__(self, argument: str, reason: str) -> None:
        super().__init__(
            f"Invalid argument {argument!r}: {reason}",
            "INVALID_ARGUMENT",
            {"argument": argument, "reason": reason},
        )


class ResourceNotFoundException(JobBoardException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(JobBoardException):
    """Raised when a write collides with an existing row.

    The identity workflow resolves primary-key conflicts as success; this
    is only surfaced by write paths that cannot treat a duplicate as a no-op.
    """

    retriable = True

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} already exists: {resource_id}",
            "CONFLICT",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TransientInfrastructureException(JobBoardException):
    """Raised when a dependency (database) stays unreachable after retries."""

    retriable = True

    def __init__(self, operation: str, reason: str, attempts: int) -> None:
        super().__init__(
            f"Operation {operation!r} failed after {attempts} attempt(s): {reason}",
            "SERVICE_UNAVAILABLE",
            {"operation": operation, "reason": reason, "attempts": attempts},
        )


class SqlNotConfiguredException(JobBoardException):
    """Raised when an operation requires Postgres but no database is configured."""

    retriable = True

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class WebhookSignatureException(JobBoardException):
    """Raised when a webhook request is unsigned, stale, or signed with the wrong secret."""

    def __init__(self, message: str = "Invalid or missing webhook signature") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")
