#!/usr/bin/env python3
"""
pfSense Provider - Server Launcher

Runs the provider's MCP server from a source checkout without installing the
package. Installed deployments use the ``pfsense-provider-server`` script.
"""

from src.pfsense_provider.main import run

if __name__ == "__main__":
    run()
