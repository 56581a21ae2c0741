"""
pfSense Provider - Shared Utilities

This package contains shared utilities and constants used across the provider.
"""

from . import constants
from .error_handlers import (
    ErrorResponse,
    ErrorSeverity,
    handle_tool_error,
    parse_resource,
    validate_mapping_id,
)
from .error_sanitizer import ErrorMessageSanitizer, log_error_safely

__all__ = [
    "ErrorMessageSanitizer",
    "ErrorResponse",
    "ErrorSeverity",
    "constants",
    "handle_tool_error",
    "log_error_safely",
    "parse_resource",
    "validate_mapping_id",
]
