"""
pfSense Provider - Delete Profile Command
"""

import typer

from ..core.config_loader import ConfigLoader
from ..core.exceptions import ConfigurationError


def delete_command(
    profile: str = typer.Argument(..., help="Profile name to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
):
    """
    Delete a settings profile.

    Examples:
        pfsense-provider delete-profile staging
        pfsense-provider delete-profile staging --force
    """
    typer.echo("\n🗑️  Delete pfSense Profile\n")

    try:
        profiles = ConfigLoader.list_profiles()
        if profile not in profiles:
            typer.echo(f"❌ Profile '{profile}' not found", err=True)
            typer.echo(f"\n📋 Available profiles: {', '.join(profiles) if profiles else 'None'}")
            raise typer.Exit(1)

        typer.echo(f"Profile: {typer.style(profile, fg=typer.colors.YELLOW, bold=True)}\n")

        if not force and not typer.confirm(
            f"⚠️  Are you sure you want to delete profile '{profile}'?", default=False
        ):
            typer.echo("Operation cancelled")
            raise typer.Exit(0)

        ConfigLoader.delete_profile(profile)
        typer.echo(f"\n✅ Profile '{profile}' deleted successfully")

        remaining = ConfigLoader.list_profiles()
        if remaining:
            typer.echo(f"\n📋 Remaining profiles: {', '.join(remaining)}")
        else:
            typer.echo("\n📋 No profiles remaining")

    except ConfigurationError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(1)
