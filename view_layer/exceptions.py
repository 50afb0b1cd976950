"""Custom exceptions for the view layer with HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    VIEW_ERROR = "VIEW_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Usage errors
    DOMAIN_ERROR = "DOMAIN_ERROR"
    RUNTIME_ERROR = "RUNTIME_ERROR"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"

    # Resolution errors
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_INVALID = "CONFIG_INVALID"


class ViewException(Exception):
    """Base exception for view layer errors with HTTP status code support.

    All custom exceptions inherit from this class so the HTTP surface can
    translate them into one structured error payload.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VIEW_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize view exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class DomainException(ViewException):
    """An operation was invoked with a combination of arguments it cannot handle."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.DOMAIN_ERROR,
            status_code=500,
            details=details,
        )


class RuntimeException(ViewException):
    """Missing collaborator or state needed at call time (router, route match)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.RUNTIME_ERROR,
            status_code=500,
            details=details,
        )


class InvalidArgumentException(ViewException):
    """An argument has the wrong type or value."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.INVALID_ARGUMENT,
            status_code=400,
            details=details,
        )


class TemplateNotFoundException(ViewException):
    """No resolver could map a template name to a template source."""

    def __init__(self, template: str, reason: str | None = None):
        details: dict[str, Any] = {"template": template}
        if reason:
            details["reason"] = reason
        super().__init__(
            f'Unable to render template "{template}"; resolver could not resolve to a template',
            code=ErrorCode.TEMPLATE_NOT_FOUND,
            status_code=500,
            details=details,
        )


class ConfigurationException(ViewException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)
