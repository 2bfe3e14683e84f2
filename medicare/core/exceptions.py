"""Custom application exceptions."""

from typing import Any

from pydantic import ValidationError


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize exception with message and optional details."""
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundException(AppException):
    """Record not found exception."""

    def __init__(self, message: str = "Record not found"):
        """Initialize with a not-found message."""
        super().__init__(message)


class BadRequestException(AppException):
    """Operation not possible in the current state."""

    def __init__(self, message: str = "Bad request"):
        """Initialize with a bad-request message."""
        super().__init__(message)


class ConflictException(AppException):
    """Conflict exception, e.g. an illegal status transition."""

    def __init__(self, message: str = "Conflict"):
        """Initialize with a conflict message."""
        super().__init__(message)


class ValidationException(AppException):
    """Validation error exception carrying per-field messages."""

    def __init__(
        self,
        message: str = "Validation error",
        errors: dict[str, str] | None = None,
    ):
        """Initialize with a message and a field -> message mapping."""
        self.errors = errors or {}
        super().__init__(message, details={"errors": self.errors})

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "ValidationException":
        """
        Build from a pydantic validation error.

        Args:
            exc: Pydantic validation error

        Returns:
            Exception with one message per failing field
        """
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "__root__"
            errors.setdefault(field, error["msg"])
        return cls("Validation failed", errors=errors)


class StorageException(AppException):
    """Persistent store read or write failure."""

    def __init__(self, message: str = "Storage error", key: str | None = None):
        """Initialize with a message and the affected store key."""
        self.key = key
        super().__init__(message, details={"key": key})
