"""
pfSense Provider - Firewall Alias Resource

This module maps the ``pfsense_firewall_alias`` resource onto the pfSense
REST API. Aliases are identified by name; changes are applied immediately.
"""

import json
import logging
from typing import List, Optional

from mcp.server.fastmcp import Context
from pydantic import ValidationError as PydanticValidationError

from ..core import PfSenseClient, ResourceNotFoundError
from ..core.models import FirewallAlias
from ..core.retry import RetryConfig
from ..main import mcp
from ..shared.constants import API_FIREWALL_ALIAS, RESOURCE_FIREWALL_ALIAS
from ..shared.error_handlers import handle_tool_error, parse_resource
from .configuration import get_pfsense_client

logger = logging.getLogger("pfsense-provider")

READ_RETRY = RetryConfig(max_attempts=3, base_delay=1.0)


class FirewallAliasResource:
    """CRUD operations for firewall aliases."""

    type_name = RESOURCE_FIREWALL_ALIAS

    def __init__(self, client: PfSenseClient):
        self.client = client

    async def list(self) -> List[FirewallAlias]:
        data = await self.client.request(
            "GET", API_FIREWALL_ALIAS, operation="firewall_alias_list", retry_config=READ_RETRY
        )
        aliases = []
        for item in data or []:
            try:
                aliases.append(FirewallAlias.from_api(item))
            except (PydanticValidationError, KeyError, AttributeError, TypeError) as e:
                name = item.get("name") if isinstance(item, dict) else item
                logger.warning(f"Skipping unreadable firewall alias {name!r}: {e}")
        return aliases

    async def read(self, name: str) -> Optional[FirewallAlias]:
        """Return the alias, or None if it no longer exists on pfSense."""
        try:
            aliases = await self.list()
        except ResourceNotFoundError:
            return None
        for alias in aliases:
            if alias.name == name:
                return alias
        logger.info(f"Firewall alias '{name}' not found")
        return None

    async def create(self, alias: FirewallAlias) -> FirewallAlias:
        payload = {**alias.to_api_payload(), "apply": True}
        data = await self.client.request(
            "POST", API_FIREWALL_ALIAS, data=payload, operation="firewall_alias_create"
        )
        logger.info(f"Created firewall alias '{alias.name}'")
        return self._result(data, alias)

    async def update(self, name: str, alias: FirewallAlias) -> FirewallAlias:
        """Update alias ``name``; ``alias.name`` may rename it."""
        payload = {"id": name, **alias.to_api_payload(), "apply": True}
        data = await self.client.request(
            "PUT", API_FIREWALL_ALIAS, data=payload, operation="firewall_alias_update"
        )
        logger.info(f"Updated firewall alias '{name}'")
        return self._result(data, alias)

    async def delete(self, name: str) -> None:
        await self.client.request(
            "DELETE",
            API_FIREWALL_ALIAS,
            params={"id": name, "apply": "true"},
            operation="firewall_alias_delete",
        )
        logger.info(f"Deleted firewall alias '{name}'")

    @staticmethod
    def _result(data, alias: FirewallAlias) -> FirewallAlias:
        if isinstance(data, dict) and data.get("name"):
            return FirewallAlias.from_api(data)
        return alias


def _alias_fields(
    name: str, type: str, address: List[str], detail: Optional[List[str]], descr: str
) -> dict:
    return {
        "name": name,
        "type": type,
        "address": address,
        "detail": detail or [],
        "descr": descr,
    }


# ========== MCP TOOLS ==========


@mcp.tool(name="pfsense_firewall_alias_list", description="List pfSense firewall aliases")
async def pfsense_firewall_alias_list(ctx: Context) -> str:
    try:
        aliases = await FirewallAliasResource(get_pfsense_client()).list()
        return json.dumps([a.model_dump(mode="json") for a in aliases], indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "pfsense_firewall_alias_list", e)


@mcp.tool(name="pfsense_firewall_alias_get", description="Get a pfSense firewall alias by name")
async def pfsense_firewall_alias_get(ctx: Context, name: str) -> str:
    try:
        alias = await FirewallAliasResource(get_pfsense_client()).read(name)
        if alias is None:
            return f"Firewall alias '{name}' not found"
        return json.dumps(alias.model_dump(mode="json"), indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "pfsense_firewall_alias_get", e)


@mcp.tool(name="pfsense_firewall_alias_create", description="Create a pfSense firewall alias")
async def pfsense_firewall_alias_create(
    ctx: Context,
    name: str,
    type: str,
    address: List[str],
    detail: Optional[List[str]] = None,
    descr: str = "",
) -> str:
    """Create a firewall alias.

    Args:
        ctx: MCP context
        name: Alias name (letters, digits, underscores; max 31 chars)
        type: One of host, network, port, url, urltable
        address: Alias entries
        detail: Optional per-entry descriptions, one per address
        descr: Alias description
    """
    try:
        alias = parse_resource(
            FirewallAlias,
            _alias_fields(name, type, address, detail, descr),
            "pfsense_firewall_alias_create",
        )
        created = await FirewallAliasResource(get_pfsense_client()).create(alias)
        await ctx.info(f"Created firewall alias '{created.name}'")
        return json.dumps(created.model_dump(mode="json"), indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "pfsense_firewall_alias_create", e)


@mcp.tool(name="pfsense_firewall_alias_update", description="Update a pfSense firewall alias")
async def pfsense_firewall_alias_update(
    ctx: Context,
    name: str,
    type: str,
    address: List[str],
    detail: Optional[List[str]] = None,
    descr: str = "",
    new_name: Optional[str] = None,
) -> str:
    try:
        alias = parse_resource(
            FirewallAlias,
            _alias_fields(new_name or name, type, address, detail, descr),
            "pfsense_firewall_alias_update",
        )
        updated = await FirewallAliasResource(get_pfsense_client()).update(name, alias)
        await ctx.info(f"Updated firewall alias '{name}'")
        return json.dumps(updated.model_dump(mode="json"), indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "pfsense_firewall_alias_update", e)


@mcp.tool(name="pfsense_firewall_alias_delete", description="Delete a pfSense firewall alias")
async def pfsense_firewall_alias_delete(ctx: Context, name: str) -> str:
    try:
        await FirewallAliasResource(get_pfsense_client()).delete(name)
        await ctx.info(f"Deleted firewall alias '{name}'")
        return f"Firewall alias '{name}' deleted"
    except Exception as e:
        return await handle_tool_error(ctx, "pfsense_firewall_alias_delete", e)
