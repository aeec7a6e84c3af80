"""
Exception hierarchy for the math chat application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class MathChatException(Exception):
    """Base exception for all math chat application errors."""

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


class ValidationError(MathChatException):
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


class ConversationNotFoundError(MathChatException):
    """Raised when a conversation does not exist or belongs to another user."""

    def __init__(self, conversation_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize conversation not found error.

        Args:
            conversation_id: ID of the missing conversation
            details: Additional context
        """
        details = details or {}
        details["conversation_id"] = conversation_id
        super().__init__(f"Conversation not found: {conversation_id}", details)


class MissingApiKeyError(MathChatException):
    """Raised when the user has not stored an upstream API key."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            "API key is not configured. Set an API key from the settings screen.",
            {"user_id": user_id},
        )


class UpstreamUnavailableError(MathChatException):
    """Raised when the completion service answers with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upstream unavailable error.

        Args:
            message: Error message reported by the upstream, or a fallback
            status_code: HTTP status returned by the upstream
            details: Additional context
        """
        details = details or {}
        details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)


class UpstreamStreamError(MathChatException):
    """Raised when reading the upstream event stream fails mid-flight."""


class StoreError(MathChatException):
    """Raised when a record store operation fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            operation: Operation that failed (insert_message, update_conversation, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
