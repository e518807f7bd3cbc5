"""Custom exceptions for Chisa Bot.

This module defines a hierarchy of exceptions for proper error handling
across the application. All exceptions inherit from ChisaError.
"""

from __future__ import annotations


class ChisaError(Exception):
    """Base exception for all Chisa Bot errors.

    All custom exceptions in this application should inherit from this class.
    This allows for catch-all exception handling when needed.
    """

    def __init__(self, message: str = "An error occurred") -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(self.message)


# =============================================================================
# User Input Errors
# =============================================================================


class UserInputError(ChisaError):
    """Base exception for errors caused by the user's command.

    The message is sent back to the conversation as-is, so it must be
    a short human-readable notice.
    """

    pass


class UsageError(UserInputError):
    """Raised when a command is called with missing or malformed arguments.

    Attributes:
        command: The command that was misused.
    """

    def __init__(self, message: str, command: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Usage notice shown to the user.
            command: Optional command name for logging context.
        """
        self.command = command
        super().__init__(message)


class NotInGroupError(UserInputError):
    """Raised when a group-only command is used in a private chat."""


class AdminOnlyError(UserInputError):
    """Raised when a non-admin calls an admin-only command."""


class MissingTargetError(UserInputError):
    """Raised when a moderation command has no reply or mention target."""


# =============================================================================
# Store Errors
# =============================================================================


class StoreError(ChisaError):
    """Base exception for persistent store errors.

    Attributes:
        path: The path of the store file.
        original_error: The underlying OS or decoding error.
    """

    def __init__(
        self,
        path: str,
        original_error: Exception | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            path: The path of the store file.
            original_error: The underlying error.
            message: Optional custom message.
        """
        self.path = path
        self.original_error = original_error
        msg = message or f"Store error: {path}"
        if original_error:
            msg += f" ({original_error})"
        super().__init__(msg)


class StoreReadError(StoreError):
    """Raised when a store file cannot be read or decoded."""

    def __init__(self, path: str, original_error: Exception | None = None) -> None:
        super().__init__(path, original_error, f"Failed to read store {path}")


class StoreWriteError(StoreError):
    """Raised when a store file cannot be written."""

    def __init__(self, path: str, original_error: Exception | None = None) -> None:
        super().__init__(path, original_error, f"Failed to write store {path}")


# =============================================================================
# External Service Errors
# =============================================================================


class ExternalServiceError(ChisaError):
    """Raised when an external collaborator (HTTP API, chat API) fails.

    Attributes:
        service: Name of the failing service.
        original_error: The original exception, if any.
    """

    def __init__(
        self,
        service: str,
        original_error: Exception | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            service: Name of the failing service.
            original_error: The original exception that caused this error.
            message: Optional custom message.
        """
        self.service = service
        self.original_error = original_error
        msg = message or f"External service '{service}' failed"
        if original_error:
            msg += f": {original_error}"
        super().__init__(msg)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ChisaError):
    """Raised when configuration is invalid or missing.

    Attributes:
        config_key: The configuration key that is invalid.
    """

    def __init__(
        self,
        config_key: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            config_key: The configuration key that is invalid.
            message: Optional custom message.
        """
        self.config_key = config_key
        msg = message or "Configuration error"
        if config_key:
            msg = f"Invalid configuration for '{config_key}'"
            if message:
                msg += f": {message}"
        super().__init__(msg)
