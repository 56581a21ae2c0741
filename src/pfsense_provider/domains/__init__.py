"""
pfSense Provider - Domain Modules

Each module defines one resource type and registers its MCP tools.
"""

# Tools register on the server in main, which imports the modules below
from ..main import mcp  # noqa: F401
from . import configuration, dhcp_static_mapping, firewall_alias

__all__ = [
    "configuration",
    "dhcp_static_mapping",
    "firewall_alias",
]
