"""
Exception hierarchy for the ResourceHub application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ResourceHubException(Exception):
    """Base exception for all ResourceHub application errors."""

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

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class NotFoundError(ResourceHubException):
    """Raised when a requested entity does not exist."""

    def __init__(
        self,
        entity: str,
        entity_id: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            entity: Entity name (resource, user, category, ...)
            entity_id: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        details[f"{entity}_id"] = str(entity_id)
        self.entity = entity
        super().__init__(f"{entity.capitalize()} {entity_id} does not exist", details)


class ValidationError(ResourceHubException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConflictError(ResourceHubException):
    """Raised when an operation collides with existing state."""

    pass


class AuthenticationError(ResourceHubException):
    """Raised when credentials or tokens are missing or invalid."""

    pass


class PermissionDeniedError(ResourceHubException):
    """Raised when the caller is authenticated but not allowed to act."""

    def __init__(
        self,
        message: str,
        user_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if user_id:
            details["user_id"] = user_id
        super().__init__(message, details)


class StorageError(ResourceHubException):
    """Raised when object storage operations fail."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            key: Object key involved in the failed operation
            details: Additional context
        """
        details = details or {}
        if key:
            details["key"] = key
        super().__init__(message, details)
