"""
pfSense Provider - Validate Command

Resolve a profile exactly as the provider would, without contacting pfSense.
"""

import typer

from ..core.config_loader import ConfigLoader
from ..core.exceptions import ConfigurationError
from ..core.provider import configure_provider


def validate_command(
    profile: str = typer.Option("default", "--profile", "-p", help="Profile name to validate")
):
    """
    Validate provider settings offline.

    Examples:
        pfsense-provider validate
        pfsense-provider validate --profile production
    """
    typer.echo(f"\nProfile: {typer.style(profile, fg=typer.colors.CYAN, bold=True)}\n")

    try:
        settings = ConfigLoader.load(profile)
        config = configure_provider(settings)
    except ConfigurationError as e:
        typer.echo(f"❌ {e.error_code}: {e.message}", err=True)
        raise typer.Exit(1)

    summary = config.describe()
    typer.echo(f"URL: {summary['endpoint']}")
    typer.echo(f"Authentication: {summary['auth_mode']}")
    typer.echo(f"TLS Verification: {'Disabled' if summary['skip_tls_verify'] else 'Enabled'}")
    typer.echo(f"Timeout: {summary['timeout_seconds']}s")
    typer.echo(f"\n✅ {typer.style('Configuration is valid', fg=typer.colors.GREEN, bold=True)}")
