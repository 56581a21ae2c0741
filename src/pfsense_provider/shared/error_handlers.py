"""
pfSense Provider - Error Handling Helpers

Error handling for MCP tools and validation helpers shared by the resource
domains.
"""

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import APIError, PfSenseError, ValidationError
from .error_sanitizer import ErrorMessageSanitizer

if TYPE_CHECKING:
    from mcp.server.fastmcp import Context

logger = logging.getLogger("pfsense-provider")

ModelT = TypeVar("ModelT", bound=BaseModel)


class ErrorSeverity(str, Enum):
    """Enumeration for error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorResponse:
    """Structured error response with a user-safe message."""

    def __init__(self, error: Exception, operation: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM):
        self.error = error
        self.operation = operation
        self.severity = severity
        self.timestamp = datetime.now(timezone.utc)
        self.error_id = f"{operation}_{int(self.timestamp.timestamp())}"

    def get_user_message(self) -> str:
        return ErrorMessageSanitizer.sanitize_for_user(self.error, self.operation)

    def get_technical_details(self) -> Dict[str, Any]:
        """Get technical error details for logging."""
        details = {
            "error_id": self.error_id,
            "operation": self.operation,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
        }
        details.update(ErrorMessageSanitizer.sanitize_for_logs(self.error))
        if isinstance(self.error, PfSenseError):
            details["raised_at"] = self.error.timestamp.isoformat()
        if isinstance(self.error, APIError):
            details["status_code"] = self.error.status_code
        return details


async def handle_tool_error(
    ctx: "Context",
    operation: str,
    error: Exception,
    severity: ErrorSeverity = ErrorSeverity.MEDIUM,
) -> str:
    """Centralized error handling for MCP tools.

    Returns:
        User-facing error text for the tool result
    """
    error_response = ErrorResponse(error, operation, severity)

    technical_details = error_response.get_technical_details()
    logger.error(f"Tool error in {operation}: {json.dumps(technical_details, indent=2, default=str)}")

    user_message = error_response.get_user_message()
    await ctx.error(user_message)

    return f"Error: {user_message}"


def parse_resource(model: Type[ModelT], data: Dict[str, Any], operation: str) -> ModelT:
    """Build a resource model, converting pydantic errors into ValidationError.

    Raises:
        ValidationError: If the resource fields are invalid
    """
    try:
        return model(**data)
    except PydanticValidationError as e:
        problems = [
            f"{'.'.join(str(loc) for loc in err['loc']) or model.__name__}: {err['msg']}"
            for err in e.errors()
        ]
        raise ValidationError(
            f"Invalid {model.__name__}: {'; '.join(problems)}",
            context={"operation": operation, "errors": problems},
        ) from e


def validate_mapping_id(mapping_id: int, operation: str) -> None:
    """
    Raises:
        ValidationError: If the static mapping id is negative
    """
    if mapping_id < 0:
        raise ValidationError(
            f"Invalid static mapping id: {mapping_id}. Must be 0 or greater",
            context={"operation": operation, "id": mapping_id},
        )
