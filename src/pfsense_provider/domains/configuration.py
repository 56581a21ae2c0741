"""
pfSense Provider - Configuration Domain

Tools for configuring the provider from locally stored settings and
inspecting the resolved configuration.
"""

import json
import logging

from mcp.server.fastmcp import Context

from ..core import ConfigurationError, PfSenseClient
from ..core.config_loader import ConfigLoader
from ..main import mcp, provider_state
from ..shared.error_handlers import ErrorSeverity, handle_tool_error

logger = logging.getLogger("pfsense-provider")


def get_pfsense_client() -> PfSenseClient:
    """Get the configured client handle from the provider state."""
    return provider_state.get_client()


@mcp.tool(
    name="configure_pfsense_provider",
    description="Configure the pfSense provider from locally stored settings (credentials never pass through the host)",
)
async def configure_pfsense_provider(ctx: Context, profile: str = "default") -> str:
    """Configure the provider using locally stored settings.

    Settings are read from PFSENSE_* environment variables or from the
    profile file written by ``pfsense-provider setup``. Resolution does not
    contact pfSense; credentials are first used by a resource operation.

    Args:
        ctx: MCP context
        profile: Profile name to load settings from

    Returns:
        Summary of the resolved configuration (no credentials)
    """
    try:
        logger.info(f"Loading pfSense provider settings for profile: {profile}")
        settings = ConfigLoader.load(profile)
        config = await provider_state.initialize(settings, profile=profile)

        await ctx.info(f"pfSense provider configured using profile '{profile}'")
        summary = config.describe()
        return (
            f"pfSense provider configured successfully\n\n"
            f"Profile: {profile}\n"
            f"URL: {summary['endpoint']}\n"
            f"Authentication: {summary['auth_mode']}\n"
            f"TLS Verification: {'Disabled' if summary['skip_tls_verify'] else 'Enabled'}\n"
            f"Timeout: {summary['timeout_seconds']}s"
        )

    except ConfigurationError as e:
        message = await handle_tool_error(ctx, "configure_pfsense_provider", e, ErrorSeverity.HIGH)
        return (
            f"{message}\n\n"
            f"Setup:\n"
            f"1. Run: pfsense-provider setup --profile {profile}\n"
            f"2. Or set environment variables: PFSENSE_URL plus one set of credentials\n"
            f"3. Check a profile offline: pfsense-provider validate --profile {profile}"
        )
    except Exception as e:
        return await handle_tool_error(ctx, "configure_pfsense_provider", e, ErrorSeverity.HIGH)


@mcp.tool(name="get_provider_status", description="Show the resolved pfSense provider configuration")
async def get_provider_status(ctx: Context) -> str:
    """Return the non-sensitive view of the resolved configuration as JSON."""
    if provider_state.config is None:
        return json.dumps({"configured": False})
    return json.dumps(
        {"configured": True, "profile": provider_state.profile, **provider_state.config.describe()},
        indent=2,
    )
