"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class ChatterError(Exception):
    """Base exception for chatter."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(ChatterError):
    """Missing or malformed request data."""

    pass


class ConfigurationError(ChatterError):
    """Required credential or storage binding is not configured."""

    pass


class UpstreamError(ChatterError):
    """Upstream provider returned a non-success response or failed in transport."""

    def __init__(self, message: str, status_code: int = 502, details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.status_code = status_code


class PersistenceError(ChatterError):
    """Object store operation failed."""

    pass


class NotFoundError(ChatterError):
    """Resource not found."""

    pass


class AuthenticationError(ChatterError):
    """Authentication failed."""

    pass


class ForbiddenError(ChatterError):
    """Forbidden operation (resource belongs to another user)."""

    pass
