"""
pfSense Provider

Exposes pfSense firewall configuration (firewall aliases, DHCP static
mappings) as declarative resources managed through the pfSense REST API.
"""

__version__ = "1.0.0"

from .core.client import PfSenseClient
from .core.exceptions import (
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
    TimeoutError,
    TLSPolicyConflictError,
    ValidationError,
)
from .core.models import AuthMode, ProviderConfig, ProviderSettings
from .core.provider import configure_provider, create_client
from .core.state import ProviderState

__all__ = [
    # Exceptions
    "PfSenseError",
    "ConfigurationError",
    "InvalidEndpointError",
    "MissingCredentialError",
    "AmbiguousAuthError",
    "TLSPolicyConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "APIError",
    "NetworkError",
    "RateLimitError",
    "ValidationError",
    "TimeoutError",
    "ResourceNotFoundError",
    # Core
    "AuthMode",
    "ProviderSettings",
    "ProviderConfig",
    "PfSenseClient",
    "ProviderState",
    "configure_provider",
    "create_client",
]
