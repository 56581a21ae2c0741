"""
pfSense Provider - CLI Interface

Command-line interface for managing provider settings profiles and checking
them before the provider is loaded by a host.
"""

import sys

import typer

from .delete import delete_command
from .list import list_command
from .setup import setup_command
from .test import test_command
from .validate import validate_command

app = typer.Typer(
    name="pfsense-provider",
    help="pfSense Provider - settings and credential management",
    add_completion=False,
)

app.command(name="setup", help="Configure pfSense provider settings")(setup_command)
app.command(name="list-profiles", help="List all configured profiles")(list_command)
app.command(name="delete-profile", help="Delete a settings profile")(delete_command)
app.command(name="validate", help="Resolve a profile offline and show the result")(validate_command)
app.command(name="test-connection", help="Test connection to pfSense")(test_command)


def main():
    """CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\n\nOperation cancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
