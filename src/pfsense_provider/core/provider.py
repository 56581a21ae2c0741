"""
pfSense Provider - Provider Configuration and Client Factory

This module turns raw provider settings into a resolved, immutable
``ProviderConfig`` and builds the API client handle handed to resources.
Resolution is all-or-nothing: the first failing step aborts configuration.
"""

import logging
from datetime import timedelta

from .auth import resolve_auth
from .client import PfSenseClient
from .endpoint import validate_endpoint
from .exceptions import ConfigurationError
from .models import ProviderConfig, ProviderSettings
from .tls import resolve_skip_tls

logger = logging.getLogger("pfsense-provider")


def configure_provider(settings: ProviderSettings) -> ProviderConfig:
    """Resolve provider settings into a ProviderConfig.

    Raises:
        InvalidEndpointError: If the url is not a bare HTTP/HTTPS origin
        TLSPolicyConflictError: If the TLS override conflicts with the url
        MissingCredentialError: If a credential lacks its companion setting
        AmbiguousAuthError: If more than one auth mode is configured
    """
    endpoint = validate_endpoint(settings.url)
    skip_tls_verify = resolve_skip_tls(endpoint, settings.skip_tls)
    auth = resolve_auth(
        user=settings.user,
        password=settings.password,
        jwt_token=settings.jwt_token,
        api_client_id=settings.api_client_id,
        api_client_token=settings.api_client_token,
    )

    config = ProviderConfig(
        endpoint=endpoint,
        auth_mode=auth.mode,
        user=auth.user,
        password=auth.password,
        jwt_token=auth.jwt_token,
        api_client_id=auth.api_client_id,
        api_client_token=auth.api_client_token,
        skip_tls_verify=skip_tls_verify,
        request_timeout=timedelta(seconds=settings.timeout),
    )
    logger.info(
        f"Resolved provider configuration for {endpoint} "
        f"(auth: {auth.mode.value}, skip TLS verify: {skip_tls_verify})"
    )
    return config


def create_client(config: ProviderConfig) -> PfSenseClient:
    """Build the API client handle for a resolved configuration.

    No network I/O happens here; connections are opened on the first request.
    """
    if not isinstance(config, ProviderConfig):
        raise ConfigurationError(
            f"Expected a resolved ProviderConfig, got {type(config).__name__}"
        )
    return PfSenseClient(config)
