"""
pfSense Provider - Test Connection Command
"""

import asyncio

import typer

from ..core.config_loader import ConfigLoader
from ..core.exceptions import AuthenticationError, ConfigurationError, NetworkError, PfSenseError
from ..core.models import ProviderConfig
from ..core.provider import configure_provider, create_client
from ..shared.constants import API_SYSTEM_VERSION


def test_command(
    profile: str = typer.Option("default", "--profile", "-p", help="Profile name to test")
):
    """
    Test connection to pfSense.

    Examples:
        pfsense-provider test-connection
        pfsense-provider test-connection --profile production
    """
    typer.echo("\n🔍 Testing pfSense Connection\n")
    typer.echo(f"Profile: {typer.style(profile, fg=typer.colors.CYAN, bold=True)}\n")

    try:
        config = configure_provider(ConfigLoader.load(profile))
    except ConfigurationError as e:
        typer.echo(f"❌ Configuration error: {e}", err=True)
        typer.echo("\n💡 Run 'pfsense-provider setup' to configure settings")
        raise typer.Exit(1)

    typer.echo(f"URL: {config.endpoint}")
    typer.echo(f"Authentication: {config.auth_mode.value}\n")

    typer.echo("🔌 Connecting to pfSense...")
    result = asyncio.run(_test_connection_async(config))

    if not result["success"]:
        typer.echo(f"\n❌ {typer.style('Connection failed', fg=typer.colors.RED, bold=True)}")
        typer.echo(f"\nError: {result.get('error', 'Unknown error')}")
        typer.echo("\n💡 Troubleshooting tips:")
        typer.echo("   • Verify the url is correct and reachable")
        typer.echo("   • Check the credentials and that the REST API package is installed")
        typer.echo("   • Set skip_tls if pfSense uses a self-signed certificate")
        raise typer.Exit(1)

    typer.echo(f"\n✅ {typer.style('Connection successful!', fg=typer.colors.GREEN, bold=True)}")
    version = result.get("version")
    if isinstance(version, dict) and version.get("version"):
        typer.echo(f"   pfSense version: {version['version']}")


async def _test_connection_async(config: ProviderConfig) -> dict:
    client = create_client(config)
    try:
        version = await client.request("GET", API_SYSTEM_VERSION, operation="test_connection")
        return {"success": True, "version": version}
    except AuthenticationError as e:
        return {"success": False, "error": f"Authentication failed: {e!s}"}
    except NetworkError as e:
        return {"success": False, "error": f"Network error: {e!s}"}
    except PfSenseError as e:
        return {"success": False, "error": str(e)}
    finally:
        await client.close()
