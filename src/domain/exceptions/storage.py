"""Persistence-related domain exceptions."""

from .base import DomainException


class StorageException(DomainException):
    """Raised when the backing store fails (connectivity, constraints, etc.)."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(
            message=message,
            code="STORAGE_ERROR",
        )
        self.operation = operation
