"""
pfSense Provider - Provider State

Holds the resolved configuration and client handle of one provider instance.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .exceptions import ConfigurationError
from .models import ProviderConfig, ProviderSettings
from .provider import configure_provider, create_client

if TYPE_CHECKING:
    from .client import PfSenseClient

logger = logging.getLogger("pfsense-provider")


@dataclass
class ProviderState:
    """Configured provider instance with explicit lifecycle."""

    config: ProviderConfig | None = None
    client: Optional["PfSenseClient"] = None
    profile: str | None = None

    async def initialize(self, settings: ProviderSettings, profile: str | None = None) -> ProviderConfig:
        """Resolve settings and build the client handle.

        On failure the previous configuration is left untouched.

        Raises:
            ConfigurationError: If the settings cannot be resolved
        """
        config = configure_provider(settings)
        client = create_client(config)

        await self.cleanup()
        self.config = config
        self.client = client
        self.profile = profile

        logger.info(f"pfSense provider configured for {config.endpoint}")
        return config

    def get_client(self) -> "PfSenseClient":
        """
        Raises:
            ConfigurationError: If the provider has not been configured
        """
        if not self.config or not self.client:
            raise ConfigurationError(
                "pfSense provider not configured. Use configure_pfsense_provider first."
            )
        return self.client

    async def cleanup(self):
        if self.client:
            await self.client.close()
        self.client = None
        self.config = None
        self.profile = None
