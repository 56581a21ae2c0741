"""
pfSense Provider - Data Models

This module contains Pydantic models for provider settings, the resolved
provider configuration and the pfSense resources managed by the provider.
"""

import ipaddress
import re
from datetime import timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_TIMEOUT_SECONDS = 5

ALIAS_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{1,31}$")
MAC_ADDRESS_PATTERN = re.compile(r"^([0-9A-Fa-f]{2}:){5}[0-9A-Fa-f]{2}$")


class AuthMode(str, Enum):
    """Authentication mechanism used against the pfSense REST API."""

    NONE = "none"
    LOCAL = "local"
    JWT = "jwt"
    TOKEN = "token"


class ProviderSettings(BaseModel):
    """Raw provider settings as supplied by the host, environment or profile."""

    url: str = Field(..., description="The url of the target pfSense, e.g. https://192.168.1.1")
    user: str | None = Field(default=None, description="Local authentication username")
    password: str | None = Field(default=None, description="Local authentication password", repr=False)
    jwt_token: str | None = Field(default=None, description="JWT token for authentication", repr=False)
    api_client_id: str | None = Field(default=None, description="API client ID for token authentication")
    api_client_token: str | None = Field(
        default=None, description="API client token for token authentication", repr=False
    )
    skip_tls: bool | None = Field(
        default=None,
        description="Skip TLS verification. Defaults to true unless the url uses HTTPS",
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Request timeout in seconds"
    )


class ProviderConfig(BaseModel):
    """Resolved, immutable provider configuration shared by all resources."""

    model_config = ConfigDict(frozen=True)

    endpoint: str
    auth_mode: AuthMode = AuthMode.NONE
    user: str | None = None
    password: str | None = Field(default=None, repr=False)
    jwt_token: str | None = Field(default=None, repr=False)
    api_client_id: str | None = None
    api_client_token: str | None = Field(default=None, repr=False)
    skip_tls_verify: bool = False
    request_timeout: timedelta = timedelta(seconds=DEFAULT_TIMEOUT_SECONDS)

    def describe(self) -> dict[str, Any]:
        """Non-sensitive view of the configuration."""
        return {
            "endpoint": self.endpoint,
            "auth_mode": self.auth_mode.value,
            "skip_tls_verify": self.skip_tls_verify,
            "timeout_seconds": int(self.request_timeout.total_seconds()),
        }


# ========== Resources ==========


class FirewallAliasType(str, Enum):
    HOST = "host"
    NETWORK = "network"
    PORT = "port"
    URL = "url"
    URL_PORTS = "url_ports"
    URLTABLE = "urltable"
    URLTABLE_PORTS = "urltable_ports"


class FirewallAlias(BaseModel):
    """A pfSense firewall alias."""

    name: str
    type: FirewallAliasType
    address: list[str] = Field(default_factory=list)
    detail: list[str] = Field(default_factory=list)
    descr: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not ALIAS_NAME_PATTERN.match(v):
            raise ValueError(
                "Alias name must be 1-31 characters of letters, digits or underscores"
            )
        return v

    @model_validator(mode="after")
    def validate_detail(self):
        if self.detail and len(self.detail) != len(self.address):
            raise ValueError("detail must have one entry per address")
        return self

    def to_api_payload(self) -> dict[str, Any]:
        payload = {
            "name": self.name,
            "type": self.type.value,
            "address": list(self.address),
            "descr": self.descr,
        }
        if self.detail:
            payload["detail"] = list(self.detail)
        return payload

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "FirewallAlias":
        """Build an alias from the API representation.

        pfSense stores addresses space separated and details separated by ``||``.
        """
        address = data.get("address") or ""
        detail = data.get("detail") or ""
        if isinstance(address, str):
            address = address.split()
        if isinstance(detail, str):
            detail = [d for d in detail.split("||") if d] if detail else []
        return cls(
            name=data["name"],
            type=data["type"],
            address=address,
            detail=detail if len(detail) == len(address) else [],
            descr=data.get("descr") or "",
        )


class DhcpStaticMapping(BaseModel):
    """A DHCP static mapping on one pfSense interface."""

    interface: str = Field(..., min_length=1)
    mac: str = ""
    ipaddr: str | None = None
    hostname: str = ""
    descr: str = ""
    cid: str = ""
    domain: str = ""
    arp_table_static_entry: bool = False

    @field_validator("mac")
    @classmethod
    def validate_mac(cls, v):
        # Mappings keyed by client identifier carry no MAC
        if v == "":
            return v
        if not MAC_ADDRESS_PATTERN.match(v):
            raise ValueError("MAC address must be six colon separated hex octets")
        return v.lower()

    @field_validator("ipaddr")
    @classmethod
    def validate_ipaddr(cls, v):
        if v:
            ipaddress.IPv4Address(v)
        return v or None

    @model_validator(mode="after")
    def validate_identity(self):
        if not self.mac and not self.cid:
            raise ValueError("A static mapping needs a mac or a cid")
        return self

    def to_api_payload(self) -> dict[str, Any]:
        payload = self.model_dump(exclude_none=True)
        if not self.mac:
            del payload["mac"]
        return payload

    @classmethod
    def from_api(cls, interface: str, data: dict[str, Any]) -> "DhcpStaticMapping":
        return cls(
            interface=interface,
            mac=data.get("mac") or "",
            ipaddr=data.get("ipaddr") or None,
            hostname=data.get("hostname") or "",
            descr=data.get("descr") or "",
            cid=data.get("cid") or "",
            domain=data.get("domain") or "",
            # pfSense reports flags as present/absent keys
            arp_table_static_entry="arp_table_static_entry" in data
            and data["arp_table_static_entry"] not in (False, None),
        )
