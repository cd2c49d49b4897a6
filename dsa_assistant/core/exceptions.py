"""
Exception hierarchy for the DSA assistant.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AssistantError(Exception):
    """Base exception for all assistant errors."""

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


class InvalidArgumentError(AssistantError, ValueError):
    """Raised when a request or chunking parameter is malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid argument error.

        Args:
            message: Error message
            field: Parameter name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ContentNotFoundError(AssistantError):
    """Raised when a lesson, chapter or other content cannot be found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize content not found error.

        Args:
            resource_type: Kind of resource (e.g. "Lesson")
            resource_id: Identifier that was looked up
            details: Additional context
        """
        self.resource_type = resource_type
        self.resource_id = resource_id
        details = details or {}
        details["resource_id"] = str(resource_id)
        super().__init__(f"{resource_type} not found with id: {resource_id}", details)


class ProviderUnavailableError(AssistantError):
    """Raised when an embedding or completion provider fails or times out."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider unavailable error.

        Args:
            message: Error message
            provider: Provider role that failed ("embedding", "completion")
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class ProviderError(ProviderUnavailableError):
    """Raised by provider adapters on transport, auth, quota or timeout failure."""

    pass


class RateLimitExceededError(AssistantError):
    """Raised when a user exceeds the request limit of the sliding window."""

    def __init__(self, retry_after_seconds: int, limit: int) -> None:
        """
        Initialize rate limit error.

        Args:
            retry_after_seconds: Seconds until the oldest request leaves the window
            limit: Configured request limit
        """
        self.retry_after_seconds = retry_after_seconds
        self.limit = limit
        super().__init__(
            "Rate limit exceeded. Please try again later.",
            {"retry_after_seconds": retry_after_seconds, "limit": limit},
        )


class InternalInconsistencyError(AssistantError):
    """Raised when pipeline state contradicts itself (e.g. embedding count mismatch)."""

    pass
