"""
Shared pytest configuration and fixtures for pfSense provider tests.

This module provides common fixtures used across all test modules including:
- Provider settings and resolved configurations
- An httpx mock transport recording requests
- MCP context mocks
"""

import json
from datetime import timedelta
from typing import Any
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from src.pfsense_provider.core import (
    AuthMode,
    PfSenseClient,
    ProviderConfig,
    ProviderSettings,
)

# ========== Configuration Fixtures ==========


@pytest.fixture
def https_settings() -> ProviderSettings:
    """Provider settings using token auth against an HTTPS endpoint."""
    return ProviderSettings(
        url="https://192.168.1.1",
        api_client_id="test_client_id",
        api_client_token="test_client_token_abcdef",
    )


@pytest.fixture
def token_config() -> ProviderConfig:
    """A resolved token-auth configuration with verification skipped for tests."""
    return ProviderConfig(
        endpoint="https://192.168.1.1",
        auth_mode=AuthMode.TOKEN,
        api_client_id="test_client_id",
        api_client_token="test_client_token_abcdef",
        skip_tls_verify=True,
        request_timeout=timedelta(seconds=5),
    )


# ========== HTTP Mock Transport ==========


class MockTransport(httpx.MockTransport):
    """Mock transport with per-path responses that records every request."""

    def __init__(self, responses: dict[str, Any] | None = None):
        """
        Args:
            responses: Maps "METHOD /path" or "/path" to a canned response. A response
                is either JSON data (200) or {"status_code": int, "data": ...}
        """
        self.responses = responses or {}
        self.requests_made: list[dict[str, Any]] = []
        super().__init__(self._handle_request)

    def _handle_request(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests_made.append(
            {
                "method": request.method,
                "url": str(request.url),
                "path": request.url.path,
                "params": dict(request.url.params),
                "headers": dict(request.headers),
                "json": body,
            }
        )

        entry = self.responses.get(f"{request.method} {request.url.path}")
        if entry is None:
            entry = self.responses.get(request.url.path, {"status": "ok", "data": []})

        status_code = 200
        if isinstance(entry, dict) and "status_code" in entry:
            status_code = entry["status_code"]
            entry = entry.get("data", {})

        return httpx.Response(status_code=status_code, json=entry, request=request)


@pytest.fixture
def mock_transport() -> MockTransport:
    return MockTransport()


def _make_client(config: ProviderConfig, responses: dict[str, Any] | None = None):
    transport = MockTransport(responses)
    return PfSenseClient(config, transport=transport), transport


def _envelope(data: Any, code: int = 200, message: str = "Success") -> dict[str, Any]:
    return {"status": "ok", "code": code, "return": 0, "message": message, "data": data}


@pytest.fixture
def make_client():
    """Factory building a PfSenseClient wired to a MockTransport; returns (client, transport)."""
    return _make_client


@pytest.fixture
def envelope():
    """Factory for the pfSense REST API response envelope."""
    return _envelope


# ========== Mock Client Fixtures ==========


@pytest.fixture
def mock_pfsense_client(token_config):
    """A PfSenseClient mock with ``request`` as AsyncMock."""
    client = Mock(spec=PfSenseClient)
    client.config = token_config
    client.request = AsyncMock(return_value=[])
    client.close = AsyncMock()
    return client


# ========== MCP Context Mocks ==========


@pytest.fixture
def mock_mcp_context():
    """Provide a mock MCP context for tool testing."""
    context = Mock()
    context.info = AsyncMock()
    context.warning = AsyncMock()
    context.error = AsyncMock()
    context.debug = AsyncMock()
    return context
