"""
Tests for the validate CLI command.
"""

from unittest.mock import patch

from typer.testing import CliRunner

from src.pfsense_provider.cli import app
from src.pfsense_provider.core.exceptions import ConfigurationError
from src.pfsense_provider.core.models import ProviderSettings

runner = CliRunner()


class TestValidateCommand:
    """Test validate CLI command."""

    def _invoke(self, settings, *args):
        with patch("src.pfsense_provider.cli.validate.ConfigLoader") as MockConfigLoader:
            MockConfigLoader.load.return_value = settings
            return runner.invoke(app, ["validate", *args])

    def test_valid_https_without_auth(self):
        result = self._invoke(ProviderSettings(url="https://192.168.1.1"))

        assert result.exit_code == 0
        assert "Authentication: none" in result.output
        assert "TLS Verification: Enabled" in result.output
        assert "Timeout: 5s" in result.output
        assert "Configuration is valid" in result.output

    def test_valid_plain_http(self):
        result = self._invoke(ProviderSettings(url="http://10.0.0.1", jwt_token="y"))

        assert result.exit_code == 0
        assert "Authentication: jwt" in result.output
        assert "TLS Verification: Disabled" in result.output

    def test_missing_password(self):
        result = self._invoke(ProviderSettings(url="https://192.168.1.1", user="admin"))

        assert result.exit_code == 1
        assert "MissingCredential" in result.output

    def test_ambiguous_auth(self):
        result = self._invoke(
            ProviderSettings(url="https://192.168.1.1", user="admin", password="x", jwt_token="y")
        )

        assert result.exit_code == 1
        assert "AmbiguousAuth" in result.output

    def test_url_with_path(self):
        result = self._invoke(ProviderSettings(url="https://192.168.1.1/api"))

        assert result.exit_code == 1
        assert "InvalidEndpoint" in result.output

    def test_tls_conflict(self):
        result = self._invoke(ProviderSettings(url="http://10.0.0.1", skip_tls=False), "--profile", "lab")

        assert result.exit_code == 1
        assert "TLSPolicyConflict" in result.output

    def test_missing_profile(self):
        with patch("src.pfsense_provider.cli.validate.ConfigLoader") as MockConfigLoader:
            MockConfigLoader.load.side_effect = ConfigurationError("No settings found for profile 'lab'")

            result = runner.invoke(app, ["validate", "-p", "lab"])

        assert result.exit_code == 1
        assert "No settings found for profile 'lab'" in result.output
