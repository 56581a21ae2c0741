"""
pfSense Provider - Setup Command

Interactive setup for storing provider settings in a profile.
"""

import getpass

import typer
from pydantic import ValidationError as PydanticValidationError

from ..core.config_loader import ConfigLoader
from ..core.exceptions import ConfigurationError
from ..core.models import DEFAULT_TIMEOUT_SECONDS, AuthMode, ProviderSettings
from ..core.provider import configure_provider

AUTH_CHOICES = [AuthMode.LOCAL.value, AuthMode.JWT.value, AuthMode.TOKEN.value, AuthMode.NONE.value]


def setup_command(
    profile: str = typer.Option(
        "default", "--profile", "-p", help="Profile name (default, production, staging, etc.)"
    ),
    url: str | None = typer.Option(None, "--url", help="pfSense URL (e.g., https://192.168.1.1)"),
    user: str | None = typer.Option(None, "--user", help="Local authentication username"),
    password: str | None = typer.Option(None, "--password", help="Local authentication password"),
    jwt_token: str | None = typer.Option(None, "--jwt-token", help="JWT token"),
    api_client_id: str | None = typer.Option(None, "--api-client-id", help="API client ID"),
    api_client_token: str | None = typer.Option(None, "--api-client-token", help="API client token"),
    skip_tls: bool | None = typer.Option(
        None, "--skip-tls/--verify-tls", help="Override TLS verification (default: inferred from url)"
    ),
    timeout: int = typer.Option(DEFAULT_TIMEOUT_SECONDS, "--timeout", help="Request timeout in seconds"),
    interactive: bool = typer.Option(
        True, "--interactive/--non-interactive", help="Interactive mode with prompts"
    ),
):
    """
    Configure pfSense provider settings.

    Examples:
        # Interactive setup
        pfsense-provider setup

        # Non-interactive setup with API token authentication
        pfsense-provider setup --non-interactive --url https://192.168.1.1 \\
            --api-client-id ID --api-client-token TOKEN
    """
    typer.echo("\n🔧 pfSense Provider - Settings Setup\n")
    typer.echo(f"Profile: {typer.style(profile, fg=typer.colors.CYAN, bold=True)}\n")

    if interactive:
        if not url:
            url = typer.prompt("pfSense URL (e.g., https://192.168.1.1)")
        if not any([user, jwt_token, api_client_id]):
            mode = typer.prompt(f"Authentication ({'/'.join(AUTH_CHOICES)})", default=AuthMode.TOKEN.value)
            if mode == AuthMode.LOCAL.value:
                user = typer.prompt("Username")
                password = getpass.getpass("Password (hidden): ")
            elif mode == AuthMode.JWT.value:
                jwt_token = getpass.getpass("JWT token (hidden): ")
            elif mode == AuthMode.TOKEN.value:
                api_client_id = typer.prompt("API client ID")
                api_client_token = getpass.getpass("API client token (hidden): ")
    elif not url:
        typer.echo("❌ Error: --url is required in non-interactive mode", err=True)
        raise typer.Exit(1)

    try:
        settings = ProviderSettings(
            url=url,
            user=user,
            password=password,
            jwt_token=jwt_token,
            api_client_id=api_client_id,
            api_client_token=api_client_token,
            skip_tls=skip_tls,
            timeout=timeout,
        )
        config = configure_provider(settings)
    except (PydanticValidationError, ConfigurationError) as e:
        typer.echo(f"❌ Invalid configuration: {e}", err=True)
        raise typer.Exit(1)

    try:
        ConfigLoader.save_profile(profile, settings)
    except (OSError, ConfigurationError) as e:
        typer.echo(f"\n❌ Error saving profile: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✅ Profile '{profile}' saved (authentication: {config.auth_mode.value})")
    typer.echo(f"\n📍 Config location: {ConfigLoader.DEFAULT_CONFIG_FILE}")
    typer.echo("🔒 File permissions: 0600 (owner read/write only)")
    typer.echo("\n📖 Next steps:")
    typer.echo(f"   • Test connection: pfsense-provider test-connection --profile {profile}")
    typer.echo(f'   • In your MCP host: "Configure pfSense provider using profile {profile}"')
