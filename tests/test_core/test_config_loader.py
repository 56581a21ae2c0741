"""
Tests for the pfSense provider ConfigLoader.

Covers environment variables, profile files, priority resolution and
profile management.
"""

import json
import os
import stat

import pytest

from src.pfsense_provider.core.config_loader import ConfigLoader, parse_bool
from src.pfsense_provider.core.exceptions import ConfigurationError
from src.pfsense_provider.core.models import ProviderSettings

ENV_VARS = [
    "PFSENSE_URL",
    "PFSENSE_USER",
    "PFSENSE_PASSWORD",
    "PFSENSE_JWT_TOKEN",
    "PFSENSE_API_CLIENT_ID",
    "PFSENSE_API_CLIENT_TOKEN",
    "PFSENSE_SKIP_TLS",
    "PFSENSE_TIMEOUT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_config(tmp_path, monkeypatch):
    """Point ConfigLoader at a temporary config file."""
    config_dir = tmp_path / ".pfsense-provider"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(ConfigLoader, "DEFAULT_CONFIG_DIR", config_dir)
    monkeypatch.setattr(ConfigLoader, "DEFAULT_CONFIG_FILE", config_file)
    return config_file


@pytest.fixture
def config_file(temp_config):
    temp_config.parent.mkdir()
    config_data = {
        "default": {
            "url": "https://192.168.1.1",
            "api_client_id": "cid",
            "api_client_token": "SECRET_TOKEN",
        },
        "lab": {
            "url": "http://10.0.0.1",
            "user": "admin",
            "password": "SECRET_PASSWORD",
            "timeout": 10,
        },
        "broken": {"url": "https://192.168.1.2", "user": "admin"},
    }
    temp_config.write_text(json.dumps(config_data))
    os.chmod(temp_config, 0o600)
    return temp_config


class TestEnvironment:
    """Priority 1: environment variables."""

    def test_load_from_env(self, monkeypatch):
        monkeypatch.setenv("PFSENSE_URL", "https://192.168.1.1")
        monkeypatch.setenv("PFSENSE_JWT_TOKEN", "jwt")
        monkeypatch.setenv("PFSENSE_SKIP_TLS", "yes")
        monkeypatch.setenv("PFSENSE_TIMEOUT", "15")

        settings = ConfigLoader._load_from_env()

        assert settings.url == "https://192.168.1.1"
        assert settings.jwt_token == "jwt"
        assert settings.skip_tls is True
        assert settings.timeout == 15

    def test_env_without_url_is_ignored(self, monkeypatch):
        monkeypatch.setenv("PFSENSE_USER", "admin")

        assert ConfigLoader._load_from_env() is None

    def test_env_empty_values_are_unset(self, monkeypatch):
        monkeypatch.setenv("PFSENSE_URL", "https://192.168.1.1")
        monkeypatch.setenv("PFSENSE_USER", "")
        monkeypatch.setenv("PFSENSE_TIMEOUT", "")

        settings = ConfigLoader._load_from_env()

        assert settings.user is None
        assert settings.timeout == 5

    def test_env_invalid_timeout(self, monkeypatch):
        monkeypatch.setenv("PFSENSE_URL", "https://192.168.1.1")
        monkeypatch.setenv("PFSENSE_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError):
            ConfigLoader._load_from_env()

    def test_env_invalid_bool(self, monkeypatch):
        monkeypatch.setenv("PFSENSE_URL", "https://192.168.1.1")
        monkeypatch.setenv("PFSENSE_SKIP_TLS", "maybe")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader._load_from_env()

        assert "PFSENSE_SKIP_TLS" in exc_info.value.message

    def test_env_takes_priority_over_file(self, monkeypatch, config_file):
        monkeypatch.setenv("PFSENSE_URL", "https://env.example.com")

        assert ConfigLoader.load("default").url == "https://env.example.com"


class TestConfigFile:
    """Priority 2: profile config file."""

    def test_load_profile(self, config_file):
        settings = ConfigLoader.load("lab")

        assert settings.url == "http://10.0.0.1"
        assert settings.user == "admin"
        assert settings.timeout == 10

    def test_missing_profile(self, config_file):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.load("production")

        assert "No settings found for profile 'production'" in exc_info.value.message

    def test_no_file(self, temp_config):
        with pytest.raises(ConfigurationError):
            ConfigLoader.load()

    def test_invalid_json(self, temp_config):
        temp_config.parent.mkdir()
        temp_config.write_text("{not json")
        os.chmod(temp_config, 0o600)

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.load()

        assert "Invalid JSON" in exc_info.value.message

    def test_insecure_permissions_fixed(self, config_file):
        os.chmod(config_file, 0o644)

        ConfigLoader.load()

        assert stat.S_IMODE(os.stat(config_file).st_mode) == 0o600


class TestProfileManagement:
    """Save, list, delete and describe profiles."""

    def test_save_and_load_roundtrip(self, temp_config):
        settings = ProviderSettings(url="https://192.168.1.1", jwt_token="jwt", skip_tls=True)

        ConfigLoader.save_profile("prod", settings)

        assert ConfigLoader.load("prod") == settings
        assert stat.S_IMODE(os.stat(temp_config).st_mode) == 0o600
        saved = json.loads(temp_config.read_text())["prod"]
        assert "user" not in saved

    def test_list_profiles(self, config_file):
        assert ConfigLoader.list_profiles() == ["default", "lab", "broken"]

    def test_list_profiles_without_file(self, temp_config):
        assert ConfigLoader.list_profiles() == []

    def test_delete_profile(self, config_file):
        ConfigLoader.delete_profile("lab")

        assert "lab" not in ConfigLoader.list_profiles()

    def test_delete_missing_profile(self, config_file):
        with pytest.raises(ConfigurationError):
            ConfigLoader.delete_profile("nope")

    def test_profile_info_has_no_secrets(self, config_file):
        info = ConfigLoader.get_profile_info("default")

        assert info == {
            "url": "https://192.168.1.1",
            "auth_mode": "token",
            "skip_tls": None,
            "timeout": 5,
        }
        assert "SECRET_TOKEN" not in json.dumps(info)

    def test_profile_info_reports_invalid_auth(self, config_file):
        info = ConfigLoader.get_profile_info("broken")

        assert info["auth_mode"] == "invalid (MissingCredential)"


def test_parse_bool():
    assert parse_bool("TRUE", "X") is True
    assert parse_bool(" off ", "X") is False
    with pytest.raises(ConfigurationError):
        parse_bool("2", "X")
