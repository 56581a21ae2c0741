"""
Tests for the setup CLI command.
"""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from src.pfsense_provider.cli import app
from src.pfsense_provider.core.config_loader import ConfigLoader

runner = CliRunner()


@pytest.fixture
def temp_config_dir(tmp_path, monkeypatch):
    """Point the config loader at a temporary directory."""
    config_dir = tmp_path / ".pfsense-provider"
    config_dir.mkdir()
    config_file = config_dir / "config.json"

    monkeypatch.setattr(ConfigLoader, "DEFAULT_CONFIG_DIR", config_dir)
    monkeypatch.setattr(ConfigLoader, "DEFAULT_CONFIG_FILE", config_file)

    return config_dir


def _saved(config_dir, profile="default"):
    return json.loads((config_dir / "config.json").read_text())[profile]


class TestSetupCommand:
    """Test setup command."""

    def test_non_interactive_token_auth(self, temp_config_dir):
        result = runner.invoke(
            app,
            [
                "setup",
                "--non-interactive",
                "--url",
                "https://192.168.1.1",
                "--api-client-id",
                "client",
                "--api-client-token",
                "secret",
            ],
        )

        assert result.exit_code == 0
        assert "Profile 'default' saved (authentication: token)" in result.output
        assert "secret" not in result.output
        assert _saved(temp_config_dir) == {
            "url": "https://192.168.1.1",
            "api_client_id": "client",
            "api_client_token": "secret",
            "timeout": 5,
        }

    def test_non_interactive_skip_tls_flag(self, temp_config_dir):
        result = runner.invoke(
            app,
            ["setup", "--non-interactive", "-p", "lab", "--url", "https://pfsense.lab", "--skip-tls", "--timeout", "10"],
        )

        assert result.exit_code == 0
        saved = _saved(temp_config_dir, "lab")
        assert saved["skip_tls"] is True
        assert saved["timeout"] == 10

    def test_non_interactive_requires_url(self, temp_config_dir):
        result = runner.invoke(app, ["setup", "--non-interactive"])

        assert result.exit_code == 1
        assert "--url is required" in result.output

    def test_rejects_ambiguous_auth(self, temp_config_dir):
        result = runner.invoke(
            app,
            [
                "setup",
                "--non-interactive",
                "--url",
                "https://192.168.1.1",
                "--user",
                "admin",
                "--password",
                "x",
                "--jwt-token",
                "y",
            ],
        )

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert not (temp_config_dir / "config.json").exists()

    def test_rejects_tls_conflict(self, temp_config_dir):
        result = runner.invoke(
            app, ["setup", "--non-interactive", "--url", "http://10.0.0.1", "--verify-tls"]
        )

        assert result.exit_code == 1
        assert "Cannot enforce TLS" in result.output

    def test_interactive_local_auth(self, temp_config_dir):
        with patch("src.pfsense_provider.cli.setup.getpass.getpass", return_value="pfsense"):
            result = runner.invoke(app, ["setup"], input="https://192.168.1.1\nlocal\nadmin\n")

        assert result.exit_code == 0
        assert "authentication: local" in result.output
        saved = _saved(temp_config_dir)
        assert saved["user"] == "admin"
        assert saved["password"] == "pfsense"

    def test_interactive_no_auth(self, temp_config_dir):
        result = runner.invoke(app, ["setup"], input="https://192.168.1.1\nnone\n")

        assert result.exit_code == 0
        assert "authentication: none" in result.output
