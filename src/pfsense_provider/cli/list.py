"""
pfSense Provider - List Profiles Command
"""

import typer

from ..core.config_loader import ConfigLoader
from ..core.exceptions import ConfigurationError


def list_command(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show detailed information for each profile"
    )
):
    """
    List all configured pfSense provider profiles.

    Examples:
        pfsense-provider list-profiles
        pfsense-provider list-profiles --verbose
    """
    typer.echo("\n📋 Configured pfSense Profiles\n")

    try:
        profiles = ConfigLoader.list_profiles()
    except ConfigurationError as e:
        typer.echo(f"❌ Error listing profiles: {e}", err=True)
        raise typer.Exit(1)

    if not profiles:
        typer.echo("❌ No profiles configured yet")
        typer.echo("\n💡 Tip: Run 'pfsense-provider setup' to configure your first profile")
        return

    typer.echo(f"Found {len(profiles)} profile(s):\n")

    for profile in profiles:
        if not verbose:
            typer.echo(f"  • {profile}")
            continue
        try:
            info = ConfigLoader.get_profile_info(profile)
        except ConfigurationError as e:
            typer.echo(f"📦 {profile} - Error loading details: {e}\n")
            continue
        skip_tls = "auto" if info["skip_tls"] is None else info["skip_tls"]
        typer.echo(f"📦 {typer.style(profile, fg=typer.colors.CYAN, bold=True)}")
        typer.echo(f"   URL: {info['url']}")
        typer.echo(f"   Authentication: {info['auth_mode']}")
        typer.echo(f"   Skip TLS: {skip_tls}")
        typer.echo(f"   Timeout: {info['timeout']}s\n")

    if not verbose:
        typer.echo("\n💡 Tip: Use --verbose to see profile details")

    typer.echo(f"\n📍 Config file: {ConfigLoader.DEFAULT_CONFIG_FILE}")
