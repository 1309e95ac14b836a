"""Custom exceptions for Search Site with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    SEARCH_SITE_ERROR = "SEARCH_SITE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Template errors
    TEMPLATE_ERROR = "TEMPLATE_ERROR"
    TEMPLATE_LOAD_ERROR = "TEMPLATE_LOAD_ERROR"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    TEMPLATE_RENDER_ERROR = "TEMPLATE_RENDER_ERROR"
    TEMPLATE_REGISTRY_UNAVAILABLE = "TEMPLATE_REGISTRY_UNAVAILABLE"


class SearchSiteException(Exception):
    """Base exception for Search Site errors with HTTP status code support.

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the application.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SEARCH_SITE_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize Search Site exception.

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


class TemplateException(SearchSiteException):
    """Template registry errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TEMPLATE_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class TemplateLoadException(TemplateException):
    """Template set could not be loaded (missing directory or syntax error)."""

    def __init__(self, message: str = "Failed to load templates", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_LOAD_ERROR,
            status_code=500,
            details=details,
        )


class TemplateNotFoundException(TemplateException):
    """Requested template is not part of the loaded template set."""

    def __init__(self, template_name: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"Template not found: {template_name}",
            code=ErrorCode.TEMPLATE_NOT_FOUND,
            status_code=500,
            details={"template": template_name, **(details or {})},
        )


class TemplateRenderException(TemplateException):
    """Template failed during rendering."""

    def __init__(self, template_name: str, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"Failed to render template {template_name}: {reason}",
            code=ErrorCode.TEMPLATE_RENDER_ERROR,
            status_code=500,
            details={"template": template_name, **(details or {})},
        )


class TemplateRegistryUnavailableException(TemplateException):
    """Template registry has not been loaded or was already cleaned up."""

    def __init__(self, message: str = "Template registry is not available", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_REGISTRY_UNAVAILABLE,
            status_code=503,
            details=details,
        )
