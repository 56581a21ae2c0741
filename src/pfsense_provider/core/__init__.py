"""
pfSense Provider - Core Infrastructure

This package contains provider configuration resolution, the API client and
the exception hierarchy.
"""

from .auth import ResolvedAuth, resolve_auth
from .client import PfSenseClient, RequestResponseLogger
from .endpoint import validate_endpoint
from .exceptions import (
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
from .models import (
    AuthMode,
    DhcpStaticMapping,
    FirewallAlias,
    FirewallAliasType,
    ProviderConfig,
    ProviderSettings,
)
from .provider import configure_provider, create_client
from .retry import RetryConfig, retry_with_backoff
from .state import ProviderState
from .tls import resolve_skip_tls

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
    # Models
    "AuthMode",
    "ProviderSettings",
    "ProviderConfig",
    "FirewallAlias",
    "FirewallAliasType",
    "DhcpStaticMapping",
    # Resolution
    "validate_endpoint",
    "resolve_auth",
    "ResolvedAuth",
    "resolve_skip_tls",
    "configure_provider",
    "create_client",
    # Client
    "PfSenseClient",
    "RequestResponseLogger",
    # State
    "ProviderState",
    # Retry
    "RetryConfig",
    "retry_with_backoff",
]
