"""
pfSense Provider - API Client

This module provides the client handle used by all resources to talk to the
pfSense REST API.
"""

import base64
import json
import logging
import ssl
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

import certifi
import httpx

from .exceptions import (
    APIError,
    AuthenticationError,
    AuthorizationError,
    NetworkError,
    RateLimitError,
    ResourceNotFoundError,
    ValidationError,
)
from .exceptions import TimeoutError as PfSenseTimeoutError
from .models import AuthMode
from .retry import RetryConfig, retry_with_backoff

if TYPE_CHECKING:
    from .models import ProviderConfig

logger = logging.getLogger("pfsense-provider")

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")
USER_AGENT = "pfSense-Provider/1.0"


class RequestResponseLogger:
    """Logs API requests and responses with credential headers redacted."""

    SENSITIVE_HEADERS = ("authorization", "x-api-key")

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict] = None,
        data: Optional[Dict] = None,
        operation: str = "unknown",
    ):
        safe_headers = {}
        for key, value in (headers or {}).items():
            safe_headers[key] = "[REDACTED]" if key.lower() in self.SENSITIVE_HEADERS else value

        log_data = {
            "operation": operation,
            "request": {
                "method": method,
                "url": url,
                "headers": safe_headers,
                "has_data": bool(data),
            },
        }
        self.logger.info(f"API Request: {json.dumps(log_data)}")

    def log_response(
        self,
        status_code: int,
        response_size: Optional[int] = None,
        duration_ms: Optional[float] = None,
        operation: str = "unknown",
        error: Optional[Exception] = None,
    ):
        success = 200 <= status_code < 300
        log_data = {
            "operation": operation,
            "response": {
                "status_code": status_code,
                "response_size": response_size,
                "duration_ms": duration_ms,
                "success": success,
                "has_error": bool(error),
            },
        }
        if error:
            log_data["error"] = str(error)

        level = logging.INFO if success else logging.WARNING
        self.logger.log(level, f"API Response: {json.dumps(log_data)}")


request_logger = RequestResponseLogger(logger)


def build_auth_headers(config: "ProviderConfig") -> Dict[str, str]:
    """Authorization headers for the configured auth mode (pfSense REST API v1)."""
    if config.auth_mode == AuthMode.LOCAL:
        auth_str = f"{config.user}:{config.password}"
        return {"Authorization": f"Basic {base64.b64encode(auth_str.encode()).decode()}"}
    if config.auth_mode == AuthMode.JWT:
        return {"Authorization": f"Bearer {config.jwt_token}"}
    if config.auth_mode == AuthMode.TOKEN:
        return {"Authorization": f"{config.api_client_id} {config.api_client_token}"}
    return {}


def create_ssl_context(skip_tls_verify: bool) -> ssl.SSLContext | bool:
    """
    Build the ``verify`` argument for httpx.

    Returns False when verification is skipped, otherwise a context using the
    certifi CA bundle with TLS 1.2 as the minimum protocol version.
    """
    if skip_tls_verify:
        logger.warning(
            "TLS certificate verification is DISABLED. "
            "Connections to pfSense are open to man-in-the-middle attacks."
        )
        return False

    context = ssl.create_default_context(cafile=certifi.where())
    context.check_hostname = True
    context.verify_mode = ssl.CERT_REQUIRED
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return context


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text


class PfSenseClient:
    """Client handle for the pfSense REST API.

    Construction performs no I/O. The underlying connection is opened by
    httpx on the first request.
    """

    def __init__(self, config: "ProviderConfig", transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize pfSense API client.

        Args:
            config: Resolved provider configuration
            transport: Optional httpx transport, used by tests
        """
        self.config = config
        self.base_url = config.endpoint
        self.timeout = config.request_timeout.total_seconds()
        self.auth_headers = build_auth_headers(config)

        self.client = httpx.AsyncClient(
            verify=create_ssl_context(config.skip_tls_verify),
            timeout=httpx.Timeout(self.timeout),
            transport=transport,
        )

        logger.info(
            f"Initialized pfSense client for {self.base_url} "
            f"(auth: {config.auth_mode.value}, "
            f"TLS verification: {'DISABLED' if config.skip_tls_verify else 'enabled'})"
        )

    async def close(self):
        """Close the httpx client."""
        await self.client.aclose()

    async def request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        operation: str = "api_request",
        retry_config: Optional[RetryConfig] = None,
    ) -> Any:
        """Make a request to the pfSense API.

        Args:
            method: HTTP method
            endpoint: API path, e.g. "/api/v1/firewall/alias"
            data: JSON payload for POST/PUT/PATCH
            params: Query parameters for GET/DELETE
            operation: Name of operation for logging/error context
            retry_config: Retry transient failures when given

        Returns:
            The ``data`` member of the pfSense response envelope, or the whole
            body when no envelope is present

        Raises:
            ValidationError: For invalid method/endpoint or a 400 response
            AuthenticationError: If authentication fails (401)
            AuthorizationError: If authorization fails (403)
            ResourceNotFoundError: For not found errors (404)
            RateLimitError: If rate limit is exceeded (429)
            APIError: For other HTTP errors or an unparsable body
            NetworkError: For connection issues
            PfSenseTimeoutError: For request timeouts
        """
        if not method or not endpoint:
            raise ValidationError(
                "Method and endpoint are required",
                context={"method": method, "endpoint": endpoint},
            )
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValidationError(f"Unsupported HTTP method: {method}", context={"method": method})

        url = f"{self.base_url}{endpoint}"
        headers = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
            **self.auth_headers,
        }
        request_logger.log_request(method, url, headers, data, operation)

        async def _make_request():
            start_time = datetime.now(timezone.utc)
            try:
                if method in ("GET", "DELETE"):
                    response = await self.client.request(method, url, headers=headers, params=params)
                else:
                    response = await self.client.request(
                        method, url, headers=headers, params=params, json=data
                    )
            except httpx.TimeoutException as e:
                request_logger.log_response(0, 0, self._elapsed_ms(start_time), operation, e)
                raise PfSenseTimeoutError(
                    f"Request timed out after {self.timeout}s",
                    context={"timeout": self.timeout, "endpoint": endpoint},
                ) from e
            except httpx.ConnectError as e:
                request_logger.log_response(0, 0, self._elapsed_ms(start_time), operation, e)
                raise NetworkError(
                    f"Cannot connect to pfSense at {self.base_url}",
                    context={"base_url": self.base_url, "endpoint": endpoint, "error": str(e)},
                ) from e
            except httpx.RequestError as e:
                request_logger.log_response(0, 0, self._elapsed_ms(start_time), operation, e)
                raise NetworkError(
                    f"Network error: {e!s}", context={"endpoint": endpoint, "error": str(e)}
                ) from e

            duration_ms = self._elapsed_ms(start_time)
            response_size = len(response.content) if response.content else 0
            request_logger.log_response(response.status_code, response_size, duration_ms, operation)
            return self._handle_response(response, endpoint)

        if retry_config:
            return await retry_with_backoff(_make_request, retry_config=retry_config)
        return await _make_request()

    def _handle_response(self, response: httpx.Response, endpoint: str) -> Any:
        status = response.status_code
        context = {"status_code": status, "endpoint": endpoint}

        if status == 400:
            raise ValidationError(f"Request rejected by pfSense: {_error_message(response)}", context=context)
        if status == 401:
            raise AuthenticationError("Authentication failed - invalid pfSense credentials", context=context)
        if status == 403:
            raise AuthorizationError("Access denied - insufficient permissions", context=context)
        if status == 404:
            raise ResourceNotFoundError(f"Resource not found: {endpoint}", context=context)
        if status == 429:
            raise RateLimitError(
                "API rate limit exceeded",
                context={**context, "retry_after": response.headers.get("Retry-After")},
            )
        if not (200 <= status < 300):
            raise APIError(
                f"API error: {status} {_error_message(response)}",
                status_code=status,
                response_text=response.text,
                context=context,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise APIError(
                f"Invalid JSON response from pfSense API: {e!s}",
                status_code=status,
                response_text=response.text,
                context=context,
            ) from e

        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    @staticmethod
    def _elapsed_ms(start_time: datetime) -> float:
        return (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
