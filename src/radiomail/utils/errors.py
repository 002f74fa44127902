"""Centralized error handling module."""

import logging
from enum import Enum
from functools import wraps
from typing import Any, Dict

from radiomail.utils.logging import get_logger

_logger = None


def _get_logger():
    """Get logger with lazy initialisation."""
    global _logger
    if _logger is None:
        _logger = get_logger(__name__)
    return _logger


## Error Categories


class ErrorCategory(Enum):
    """Categories of errors for better handling."""

    VALIDATION = "validation"
    FILE_SYSTEM = "file_system"
    NOT_FOUND = "not_found"
    COLLABORATOR = "collaborator"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


## Custom Exceptions


class RadiomailError(Exception):
    """Base exception for all radiomail errors."""

    category = ErrorCategory.UNKNOWN
    user_message = "An error occurred"

    def __init__(
        self, message: str | None = None, details: Dict[str, Any] | None = None
    ):
        """Initialise RadiomailError with optional message and details."""
        self.message = message or self.user_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error details to a dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "category": self.category.value,
            "message": self.message,
            "details": self.details,
        }


## Validation Errors


class ValidationError(RadiomailError):
    """Base exception for validation-related errors."""

    category = ErrorCategory.VALIDATION
    user_message = "Invalid input"


class MissingRecipientsError(ValidationError):
    """Exception when a message has neither To nor Cc receivers."""

    user_message = "Message must have at least one recipient"


class ConflictingOptionsError(ValidationError):
    """Exception for mutually exclusive compose options."""

    user_message = "Only use one of the arguments 'in-reply-to' or 'redirect'!"


class MissingRedirectSourceError(ValidationError):
    """Exception when a redirect has no source message."""

    user_message = "There is no message to be redirected!"


class InvalidAddressError(ValidationError):
    """Exception for addresses that cannot be parsed."""

    user_message = "Invalid address"


## File System Errors


class FileSystemError(RadiomailError):
    """Base exception for file system-related errors."""

    category = ErrorCategory.FILE_SYSTEM
    user_message = "A file system error occurred"


class AttachmentLoadError(FileSystemError):
    """Exception when a local file cannot be read as an attachment."""

    user_message = "Failed to read attachment"


## Lookup Errors


class MessageNotFoundError(RadiomailError):
    """Exception when a referenced message cannot be loaded."""

    category = ErrorCategory.NOT_FOUND
    user_message = "Message not found"


## Collaborator Errors


class CollaboratorError(RadiomailError):
    """Base exception for failures of editor, forms and delivery services."""

    category = ErrorCategory.COLLABORATOR
    user_message = "An external service failed"


class EditorError(CollaboratorError):
    """Exception for text editor failures."""

    user_message = "Failed to edit message body"


class TemplateError(CollaboratorError):
    """Exception for template rendering failures."""

    user_message = "Failed to compose message for template"


class DeliveryError(CollaboratorError):
    """Exception when a message cannot be handed to the outbox."""

    user_message = "Failed to post message to outbox"


## Configuration Errors


class ConfigurationError(RadiomailError):
    """Base exception for configuration-related errors."""

    category = ErrorCategory.CONFIGURATION
    user_message = "A configuration error occurred"


class InvalidConfigError(ConfigurationError):
    """Exception for invalid configuration settings."""

    user_message = "Invalid configuration settings"


## Error Handler


class ErrorHandler:
    """Centralized error handling and logging."""

    @staticmethod
    def handle(
        error: Exception, context: str = "", log_traceback: bool = True,
        level: int = logging.ERROR,
    ) -> Dict[str, Any]:
        """Handle errors with logging and user-friendly message.

        ``level`` applies to RadiomailError; callers that report the error to
        the operator themselves pass a level below the console threshold.
        """
        if isinstance(error, RadiomailError):
            _get_logger().log(level, f"{context}: {error.message}", extra={"context": error.details})
            if log_traceback:
                _get_logger().exception(error)
            return error.to_dict()
        else:
            _get_logger().error(f"{context}: {str(error)}")
            if log_traceback:
                _get_logger().exception(error)
            return {
                "error_type": "UnknownError",
                "category": ErrorCategory.UNKNOWN.value,
                "message": str(error),
                "details": {"context": context},
            }

    @staticmethod
    def wrap(func):
        """Decorator converting unexpected exceptions into RadiomailError."""

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)

            except RadiomailError:
                raise

            except Exception as e:
                _get_logger().exception(f"Unexpected error in {func.__name__}")
                raise RadiomailError(
                    message=f"Unexpected error: {str(e)}",
                    details={"function": func.__name__},
                ) from e

        return wrapper


## Utility Functions


def format_error_message(error: Exception) -> str:
    """Format an error message for display."""
    if isinstance(error, RadiomailError):
        return error.message
    else:
        return "An unexpected error occurred - check logs for details."
