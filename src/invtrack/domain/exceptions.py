"""Domain-level exceptions.

Every failure the data-access layer can report is a subclass of
DomainException so the CLI layer can catch them uniformly and display
user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class UnsupportedResourceError(DomainException):
    """A resource identifier matches neither the collection nor the item pattern."""

    def __init__(self, resource: object, operation: str | None = None) -> None:
        self.resource = str(resource)
        self.operation = operation
        if operation:
            message = f"{operation} is not supported for {self.resource}"
        else:
            message = f"Unsupported resource: {self.resource}"
        super().__init__(message)


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class MissingRequiredFieldError(ValidationError):
    """A field required for product creation is absent from the payload."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing required field '{field}'")


class InvalidFieldValueError(ValidationError):
    """A field is present but fails its rule."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid value for '{field}': {reason}")


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageError(DomainException):
    """Base class for failures of the physical store."""


class StorageWriteFailedError(StorageError):
    """An insert, update or delete could not be completed."""


class StorageNotInitializedError(StorageError):
    """An operation was attempted before the store was opened."""
