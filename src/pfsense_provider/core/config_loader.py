"""
pfSense Provider - Configuration Loader

This module loads raw provider settings from local sources so that
credentials never have to pass through the MCP host. Priority order:

1. Environment variables (``PFSENSE_URL`` and friends)
2. Profile config file (``~/.pfsense-provider/config.json``)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .auth import resolve_auth
from .exceptions import ConfigurationError
from .models import ProviderSettings

logger = logging.getLogger("pfsense-provider")

ENV_PREFIX = "PFSENSE_"
SETTING_FIELDS = (
    "url",
    "user",
    "password",
    "jwt_token",
    "api_client_id",
    "api_client_token",
    "skip_tls",
    "timeout",
)
TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")


def parse_bool(value: str, name: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value!r}", context={"setting": name})


class ConfigLoader:
    """
    Loader for pfSense provider settings.

    Security features:
    - Config file permissions enforced to 0600
    - Secrets are never logged or returned by ``get_profile_info``
    - Profile-based multi-firewall support
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".pfsense-provider"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"
    REQUIRED_FILE_PERMISSIONS = 0o600

    @classmethod
    def load(cls, profile: str = "default") -> ProviderSettings:
        """
        Load provider settings for the specified profile.

        Raises:
            ConfigurationError: If no settings are found or they are malformed
        """
        logger.debug(f"Loading settings for profile: {profile}")

        settings = cls._load_from_env()
        if settings:
            logger.info("Loaded provider settings from environment variables")
            return settings

        settings = cls._load_from_config_file(profile)
        if settings:
            logger.info(f"Loaded provider settings for profile '{profile}' from config file")
            return settings

        raise ConfigurationError(
            f"No settings found for profile '{profile}'. "
            f"Configure them with 'pfsense-provider setup' or set the {ENV_PREFIX}URL "
            f"environment variable and credentials"
        )

    @classmethod
    def _load_from_env(cls) -> Optional[ProviderSettings]:
        """Load settings from environment variables; None when PFSENSE_URL is unset."""
        if not os.getenv(f"{ENV_PREFIX}URL"):
            return None

        raw: Dict[str, Any] = {}
        for field in SETTING_FIELDS:
            name = f"{ENV_PREFIX}{field.upper()}"
            value = os.getenv(name)
            if value is None or value == "":
                continue
            if field == "skip_tls":
                raw[field] = parse_bool(value, name)
            else:
                raw[field] = value

        try:
            return ProviderSettings(**raw)
        except PydanticValidationError as e:
            logger.error(f"Invalid provider settings in environment variables: {e}")
            raise ConfigurationError(f"Invalid provider settings in environment variables: {e}") from e

    @classmethod
    def _load_from_config_file(cls, profile: str) -> Optional[ProviderSettings]:
        """Load settings for a profile from the config file."""
        config_data = cls._read_config_file(missing_ok=True)
        if config_data is None:
            logger.debug(f"Config file not found: {cls.DEFAULT_CONFIG_FILE}")
            return None

        if profile not in config_data:
            logger.debug(f"Profile '{profile}' not found in config file")
            return None

        try:
            return ProviderSettings(**config_data[profile])
        except PydanticValidationError as e:
            logger.error(f"Invalid settings for profile '{profile}': {e}")
            raise ConfigurationError(f"Invalid settings for profile '{profile}': {e}") from e
        except TypeError as e:
            raise ConfigurationError(f"Profile '{profile}' must be a JSON object") from e

    @classmethod
    def save_profile(cls, profile: str, settings: ProviderSettings) -> None:
        """Save provider settings as a profile in the config file."""
        config_file = cls.DEFAULT_CONFIG_FILE
        config_file.parent.mkdir(parents=True, exist_ok=True)

        config_data = cls._read_config_file(missing_ok=True) or {}
        config_data[profile] = settings.model_dump(exclude_none=True)
        cls._write_config_file(config_data)

        logger.info(f"Saved profile '{profile}' to config file")

    @classmethod
    def delete_profile(cls, profile: str) -> None:
        """
        Delete a profile from the config file.

        Raises:
            ConfigurationError: If the config file or profile doesn't exist
        """
        config_data = cls._read_config_file()
        if profile not in config_data:
            raise ConfigurationError(f"Profile '{profile}' not found")

        del config_data[profile]
        cls._write_config_file(config_data)

        logger.info(f"Deleted profile '{profile}' from config file")

    @classmethod
    def list_profiles(cls) -> List[str]:
        config_data = cls._read_config_file(missing_ok=True)
        return list(config_data.keys()) if config_data else []

    @classmethod
    def get_profile_info(cls, profile: str) -> Dict[str, Any]:
        """
        Get non-sensitive information about a profile.

        Returns:
            Dictionary with url, auth mode, skip_tls and timeout (no secrets)

        Raises:
            ConfigurationError: If the profile doesn't exist
        """
        config_data = cls._read_config_file()
        if profile not in config_data:
            raise ConfigurationError(f"Profile '{profile}' not found")

        try:
            settings = ProviderSettings(**config_data[profile])
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid settings for profile '{profile}': {e}") from e

        try:
            auth_mode = resolve_auth(
                user=settings.user,
                password=settings.password,
                jwt_token=settings.jwt_token,
                api_client_id=settings.api_client_id,
                api_client_token=settings.api_client_token,
            ).mode.value
        except ConfigurationError as e:
            auth_mode = f"invalid ({e.error_code})"

        return {
            "url": settings.url,
            "auth_mode": auth_mode,
            "skip_tls": settings.skip_tls,
            "timeout": settings.timeout,
        }

    @classmethod
    def _read_config_file(cls, missing_ok: bool = False) -> Optional[Dict[str, Any]]:
        config_file = cls.DEFAULT_CONFIG_FILE
        if not config_file.exists():
            if missing_ok:
                return None
            raise ConfigurationError(f"Config file not found: {config_file}")

        cls._verify_file_permissions(config_file)
        try:
            with open(config_file) as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}")
            raise ConfigurationError(f"Invalid JSON in config file: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError("Config file must contain a JSON object of profiles")
        return config_data

    @classmethod
    def _write_config_file(cls, config_data: Dict[str, Any]) -> None:
        with open(cls.DEFAULT_CONFIG_FILE, "w") as f:
            json.dump(config_data, f, indent=2)
        cls._set_secure_permissions(cls.DEFAULT_CONFIG_FILE)

    @classmethod
    def _set_secure_permissions(cls, file_path: Path) -> None:
        """Set file permissions to 0600 (owner read/write only)."""
        try:
            os.chmod(file_path, cls.REQUIRED_FILE_PERMISSIONS)
        except OSError as e:
            logger.warning(f"Could not set secure permissions on {file_path}: {e}")

    @classmethod
    def _verify_file_permissions(cls, file_path: Path) -> None:
        """Warn about and fix config files readable by other users."""
        try:
            current_perms = os.stat(file_path).st_mode & 0o777
        except OSError as e:
            logger.debug(f"Could not verify file permissions: {e}")
            return

        if current_perms != cls.REQUIRED_FILE_PERMISSIONS:
            logger.warning(
                f"Config file {file_path} has insecure permissions {oct(current_perms)}. "
                f"Recommended: {oct(cls.REQUIRED_FILE_PERMISSIONS)}"
            )
            cls._set_secure_permissions(file_path)
