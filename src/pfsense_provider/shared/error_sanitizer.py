"""
pfSense Provider - Error Message Sanitization

Turns exceptions into user-facing messages that never carry credentials.
"""

import json
import logging
import re
from typing import Any

import httpx

from ..core.exceptions import (
    AmbiguousAuthError,
    APIError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    InvalidEndpointError,
    MissingCredentialError,
    NetworkError,
    PfSenseError,
    RateLimitError,
    ResourceNotFoundError,
    TLSPolicyConflictError,
    ValidationError,
)
from ..core.exceptions import TimeoutError as PfSenseTimeoutError

logger = logging.getLogger("pfsense-provider")


class ErrorMessageSanitizer:
    """Sanitize error messages for safe user display."""

    SENSITIVE_PATTERNS = [
        "password",
        "jwt_token",
        "api_client_token",
        "token",
        "authorization",
        "bearer",
        "basic",
        "secret",
    ]

    @staticmethod
    def sanitize_for_user(error: Exception, operation: str = "operation") -> str:
        """Return a user-safe message for ``error``."""
        if isinstance(error, InvalidEndpointError):
            return f"Invalid provider url: {error.message}"

        if isinstance(error, (MissingCredentialError, AmbiguousAuthError)):
            return f"Invalid authentication settings: {error.message}"

        if isinstance(error, TLSPolicyConflictError):
            return f"Invalid TLS settings: {error.message}"

        if isinstance(error, ConfigurationError):
            return f"Configuration error: {error.message}"

        if isinstance(error, AuthenticationError):
            return "Authentication failed. Please check your pfSense credentials."

        if isinstance(error, AuthorizationError):
            return "Authorization failed. The API user may lack necessary privileges."

        if isinstance(error, ValidationError):
            return f"Invalid input: {ErrorMessageSanitizer._sanitize_text(error.message)}"

        if isinstance(error, ResourceNotFoundError):
            return f"Resource not found: {error.message}"

        if isinstance(error, RateLimitError):
            return "Rate limit exceeded. Please wait before retrying."

        if isinstance(error, PfSenseTimeoutError):
            return "Request timed out. pfSense may be overloaded or unreachable."

        if isinstance(error, NetworkError):
            return "Network error. Cannot connect to pfSense. Check the url and network connectivity."

        if isinstance(error, httpx.TimeoutException):
            return "Request timed out. pfSense may be overloaded."

        if isinstance(error, httpx.ConnectError):
            return "Cannot connect to pfSense. Please check the url and network."

        if isinstance(error, APIError):
            return f"pfSense API error: {ErrorMessageSanitizer._sanitize_text(str(error))}"

        return f"An error occurred during {operation}. Please check the logs for details."

    @staticmethod
    def sanitize_for_logs(error: Exception) -> dict[str, Any]:
        """Return detailed, credential-free error info for logging."""
        error_info = {
            "error_type": type(error).__name__,
            "error_module": error.__class__.__module__,
            "error_message": ErrorMessageSanitizer._sanitize_text(str(error)),
        }

        if isinstance(error, PfSenseError):
            error_info["error_code"] = error.error_code
            error_info["context"] = ErrorMessageSanitizer._sanitize_context(error.context)

        if isinstance(error, APIError):
            error_info["status_code"] = error.status_code

        return error_info

    @staticmethod
    def _sanitize_text(text: str) -> str:
        """Replace values following sensitive keys, e.g. "password=x" -> "password=[REDACTED]"."""
        sanitized = text
        for pattern in ErrorMessageSanitizer.SENSITIVE_PATTERNS:
            if pattern in sanitized.lower():
                sanitized = re.sub(
                    rf"{pattern}\s*[=:]\s*\S+",
                    f"{pattern}=[REDACTED]",
                    sanitized,
                    flags=re.IGNORECASE,
                )
        return sanitized

    @staticmethod
    def _sanitize_context(context: dict[str, Any] | None) -> dict[str, Any]:
        if not context:
            return {}

        sanitized = {}
        for key, value in context.items():
            key_lower = key.lower()
            if any(pattern in key_lower for pattern in ErrorMessageSanitizer.SENSITIVE_PATTERNS):
                sanitized[key] = "[REDACTED]"
            elif isinstance(value, dict):
                sanitized[key] = ErrorMessageSanitizer._sanitize_context(value)
            elif isinstance(value, str):
                sanitized[key] = ErrorMessageSanitizer._sanitize_text(value)
            else:
                sanitized[key] = value
        return sanitized


def log_error_safely(
    logger: logging.Logger,
    error: Exception,
    operation: str = "operation",
) -> str:
    """Log error details and return the sanitized user message."""
    error_details = ErrorMessageSanitizer.sanitize_for_logs(error)
    logger.error(f"Error in {operation}: {json.dumps(error_details, default=str)}")
    return ErrorMessageSanitizer.sanitize_for_user(error, operation)
