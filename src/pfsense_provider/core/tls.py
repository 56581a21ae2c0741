"""
pfSense Provider - TLS Policy Resolution
"""

import logging

from .endpoint import endpoint_scheme
from .exceptions import TLSPolicyConflictError

logger = logging.getLogger("pfsense-provider")


def resolve_skip_tls(url: str, skip_tls: bool | None = None) -> bool:
    """Decide whether TLS certificate verification is skipped.

    Without an override, HTTPS endpoints are verified and plain HTTP endpoints
    skip verification. Asking to enforce TLS (``skip_tls=False``) on a plain
    HTTP endpoint is a conflict.

    Args:
        url: Validated provider endpoint
        skip_tls: Optional explicit override

    Returns:
        True if certificate verification should be skipped

    Raises:
        TLSPolicyConflictError: If TLS enforcement is requested for a non-HTTPS url
    """
    is_https = endpoint_scheme(url) == "https"

    if skip_tls is None:
        return not is_https

    if is_https:
        if skip_tls:
            logger.warning(f"TLS certificate verification is disabled for {url}")
        return skip_tls

    if not skip_tls:
        raise TLSPolicyConflictError(
            f"Cannot enforce TLS for url {url}",
            context={"url": url, "skip_tls": skip_tls},
        )
    return True
