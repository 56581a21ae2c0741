#!/usr/bin/env python3
"""
pfSense Provider - Main Entry Point

This module initializes the FastMCP server that hosts the provider and
registers the configuration and resource tools.
"""

import logging

from mcp.server.fastmcp import FastMCP

from .core.state import ProviderState

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("pfsense-provider")

mcp = FastMCP(
    "pfSense Provider",
    instructions="Manage pfSense firewall aliases and DHCP static mappings as resources",
)

# One provider instance per server process
provider_state = ProviderState()


# Domain modules register their tools on `mcp` when imported
from .domains import configuration  # noqa: E402
from .domains import firewall_alias  # noqa: E402
from .domains import dhcp_static_mapping  # noqa: E402


def run():
    """Console entry point for the MCP server."""
    mcp.run()


if __name__ == "__main__":
    run()
