# gfilekit/utils/exceptions.py
#
# GIO failures surface as GLib.Error and are propagated untouched. The
# classes below cover problems detected by gfilekit itself before GIO is
# called, plus configuration errors.

from enum import Enum
from typing import Any, Dict, Optional

from .translation_utils import _


class ErrorCategory(Enum):
    """Error categories for classification."""

    FILESYSTEM = "filesystem"
    CONFIG = "config"
    VALIDATION = "validation"
    SYSTEM = "system"


class GFileKitError(Exception):
    """Base exception class for all gfilekit errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        details: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.details = details or {}
        self.user_message = user_message or self._generate_user_message()

    def _generate_user_message(self) -> str:
        """Generate a user-friendly message based on the category."""
        category_messages = {
            ErrorCategory.FILESYSTEM: _("A file system error occurred"),
            ErrorCategory.CONFIG: _("A configuration error occurred"),
            ErrorCategory.VALIDATION: _("A validation error occurred"),
            ErrorCategory.SYSTEM: _("A system error occurred"),
        }
        return category_messages.get(self.category, _("An unexpected error occurred"))

    def __str__(self) -> str:
        return f"[{self.category.value.upper()}] {self.message}"


class ValidationError(GFileKitError, ValueError):
    """Raised when an argument passed to a helper is unusable."""

    def __init__(
        self,
        message: str,
        field: str = None,
        value: Any = None,
        **kwargs,
    ):
        kwargs.setdefault("category", ErrorCategory.VALIDATION)
        if field:
            message = _("Validation failed for '{}': {}").format(field, message)
        kwargs.setdefault("details", {}).update({"field": field, "value": value})
        super().__init__(message, **kwargs)


class InvalidLocationError(ValidationError):
    """Raised when a location cannot be used for the requested operation."""

    def __init__(self, location: str, reason: str, **kwargs):
        message = _("Invalid location '{}': {}").format(location, reason)
        kwargs.setdefault("category", ErrorCategory.FILESYSTEM)
        kwargs.setdefault("details", {"location": location, "reason": reason})
        kwargs.setdefault("user_message", _("Invalid location: {}").format(reason))
        super().__init__(message, **kwargs)


class ConfigError(GFileKitError):
    """Base class for configuration-related errors."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("category", ErrorCategory.CONFIG)
        super().__init__(message, **kwargs)


class ConfigValidationError(ConfigError):
    """Raised when a setting has an invalid value."""

    def __init__(self, config_key: str, value: Any, reason: str, **kwargs):
        message = _("Invalid configuration for '{}' (value: {}): {}").format(
            config_key, value, reason
        )
        kwargs.setdefault(
            "details", {"config_key": config_key, "value": value, "reason": reason}
        )
        kwargs.setdefault("user_message", _("Configuration error: {}").format(reason))
        super().__init__(message, **kwargs)


def handle_exception(
    exception: Exception,
    context: str = "",
    logger_name: str = None,
) -> Optional[GFileKitError]:
    """Log an exception and convert it to a GFileKitError."""
    from .logger import log_error_with_context

    log_error_with_context(exception, context, logger_name)
    converted_exception = (
        exception
        if isinstance(exception, GFileKitError)
        else GFileKitError(
            message=str(exception),
            details={"original_type": type(exception).__name__, "context": context},
        )
    )
    return converted_exception
