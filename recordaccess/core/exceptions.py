"""
Exception hierarchy for record access.

Every error raised by the record access layer derives from
RecordAccessError and carries the failing operation and collection once
it has passed through the RecordService facade.

Dependencies: None (pure domain layer)
System role: Centralized exception handling for record access
"""

from typing import Any


class RecordAccessError(Exception):
    """Base exception for all record access errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    @property
    def operation(self) -> str | None:
        """Facade operation that failed (get, create, update, ...)."""
        return self.details.get("operation")

    @property
    def collection(self) -> str | None:
        """Collection the failing operation addressed."""
        return self.details.get("collection")

    def with_context(self, operation: str, collection: str) -> "RecordAccessError":
        """
        Attach operation and collection context, keeping any already set.

        Returns:
            RecordAccessError: self, for use in a raise statement
        """
        self.details.setdefault("operation", operation)
        self.details.setdefault("collection", collection)
        return self

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class MetadataUnavailable(RecordAccessError):
    """Raised when a collection's entity set name cannot be resolved."""

    def __init__(
        self,
        collection_name: str,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize metadata error.

        Args:
            collection_name: Logical name that failed to resolve
            reason: Short cause (transport error, unknown collection, ...)
            details: Additional context
        """
        details = details or {}
        details["collection_name"] = collection_name
        message = f"Metadata unavailable for collection: {collection_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, details)
        self.collection_name = collection_name


class RemoteOperationFailed(RecordAccessError):
    """Raised when the live store rejects or cannot complete an operation."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize remote operation error.

        Args:
            message: Error message (store message when available)
            status_code: HTTP status returned by the store, if any
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.status_code = status_code


class BackendUnavailable(RecordAccessError):
    """Raised when the live backend is required but not configured."""
