"""
pfSense Provider - Endpoint Validation

The provider url must be a bare origin: the REST API paths are appended by the
client, so anything after the host would produce broken request URLs.
"""

from urllib.parse import urlsplit

from .exceptions import InvalidEndpointError

ALLOWED_SCHEMES = ("http", "https")


def validate_endpoint(url: str, key: str = "url") -> str:
    """Validate that ``url`` is an absolute HTTP/HTTPS origin.

    Args:
        url: Candidate endpoint string
        key: Setting name used in error messages

    Returns:
        The validated url, unchanged

    Raises:
        InvalidEndpointError: If the scheme is not http/https, the host is
            missing, or a path, query or fragment is present
    """
    if not isinstance(url, str) or not url:
        raise InvalidEndpointError(
            f"{key!r} must be a valid HTTP/HTTPS URL, got: {url!r}",
            context={"key": key},
        )

    try:
        parts = urlsplit(url)
        # Accessing port validates it
        parts.port
    except ValueError as e:
        raise InvalidEndpointError(
            f"{key!r} must be a valid HTTP/HTTPS URL, got: {url!r}",
            context={"key": key, "url": url, "error": str(e)},
        ) from e

    if parts.scheme not in ALLOWED_SCHEMES or not parts.hostname:
        raise InvalidEndpointError(
            f"{key!r} must be a valid HTTP/HTTPS URL, got: {url!r}",
            context={"key": key, "url": url, "scheme": parts.scheme},
        )

    if parts.path or parts.query or parts.fragment:
        raise InvalidEndpointError(
            f"{key!r} should not contain any path, query or fragment, got: {url!r}",
            context={"key": key, "url": url},
        )

    return url


def endpoint_scheme(url: str) -> str:
    """Return the lower-cased scheme of an already validated endpoint."""
    return urlsplit(url).scheme
