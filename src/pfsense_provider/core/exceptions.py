"""
pfSense Provider - Exception Hierarchy

This module contains all custom exceptions raised by the pfSense provider.
Configuration errors are raised while the provider is being configured and
abort initialisation; the remaining errors are raised by API calls.
"""

from datetime import datetime, timezone
from typing import Any


class PfSenseError(Exception):
    """Base exception for all pfSense provider errors with structured context."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }


# ========== Configuration errors ==========


class ConfigurationError(PfSenseError):
    """Provider not configured or invalid configuration."""


class InvalidEndpointError(ConfigurationError):
    """The configured url is not a bare HTTP/HTTPS origin."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, error_code="InvalidEndpoint", context=context)


class MissingCredentialError(ConfigurationError):
    """An authentication setting was given without its required companion."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, error_code="MissingCredential", context=context)


class AmbiguousAuthError(ConfigurationError):
    """More than one form of authentication was configured."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, error_code="AmbiguousAuth", context=context)


class TLSPolicyConflictError(ConfigurationError):
    """TLS enforcement was requested for an endpoint that cannot provide it."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, error_code="TLSPolicyConflict", context=context)


# ========== API errors ==========


class AuthenticationError(PfSenseError):
    """Authentication failed."""


class AuthorizationError(PfSenseError):
    """API user doesn't have permission for the requested operation."""


class APIError(PfSenseError):
    """API call failed."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.status_code = status_code
        self.response_text = response_text


class NetworkError(PfSenseError):
    """Network communication error."""


class RateLimitError(PfSenseError):
    """Rate limit exceeded."""


class ValidationError(PfSenseError):
    """Resource or input parameter validation failed."""


class TimeoutError(PfSenseError):
    """Request timed out."""


class ResourceNotFoundError(PfSenseError):
    """Requested resource not found."""
