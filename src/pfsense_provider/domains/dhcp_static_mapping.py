"""
pfSense Provider - DHCP Static Mapping Resource

This module maps the ``pfsense_dhcp_static_mapping`` resource onto the
pfSense REST API. Mappings live per interface and are addressed by their
position (``id``) in that interface's mapping list.
"""

import json
import logging
from typing import Dict, Optional

from mcp.server.fastmcp import Context
from pydantic import ValidationError as PydanticValidationError

from ..core import APIError, PfSenseClient, ResourceNotFoundError, ValidationError
from ..core.models import DhcpStaticMapping
from ..core.retry import RetryConfig
from ..main import mcp
from ..shared.constants import API_DHCPD_STATIC_MAPPING, RESOURCE_DHCP_STATIC_MAPPING
from ..shared.error_handlers import handle_tool_error, parse_resource, validate_mapping_id
from .configuration import get_pfsense_client

logger = logging.getLogger("pfsense-provider")

READ_RETRY = RetryConfig(max_attempts=3, base_delay=1.0)


class DhcpStaticMappingResource:
    """CRUD operations for DHCP static mappings."""

    type_name = RESOURCE_DHCP_STATIC_MAPPING

    def __init__(self, client: PfSenseClient):
        self.client = client

    async def list(self, interface: str) -> Dict[int, DhcpStaticMapping]:
        """Mappings on ``interface`` keyed by id.

        Unreadable entries are skipped but keep their position, so ids stay
        aligned with pfSense.
        """
        data = await self.client.request(
            "GET",
            API_DHCPD_STATIC_MAPPING,
            params={"interface": interface},
            operation="dhcp_static_mapping_list",
            retry_config=READ_RETRY,
        )
        mappings = {}
        for index, item in enumerate(data or []):
            try:
                mappings[index] = DhcpStaticMapping.from_api(interface, item)
            except (PydanticValidationError, AttributeError, TypeError) as e:
                logger.warning(f"Skipping unreadable DHCP static mapping {index} on {interface}: {e}")
        return mappings

    async def read(self, interface: str, mapping_id: int) -> Optional[DhcpStaticMapping]:
        """Return the mapping, or None if it no longer exists on pfSense."""
        try:
            mappings = await self.list(interface)
        except ResourceNotFoundError:
            return None
        return mappings.get(mapping_id)

    async def find_by_mac(self, interface: str, mac: str) -> Optional[int]:
        mac = mac.lower()
        if not mac:
            return None
        for mapping_id, mapping in (await self.list(interface)).items():
            if mapping.mac == mac:
                return mapping_id
        return None

    async def find_by_cid(self, interface: str, cid: str) -> Optional[int]:
        if not cid:
            return None
        for mapping_id, mapping in (await self.list(interface)).items():
            if mapping.cid == cid:
                return mapping_id
        return None

    async def create(self, mapping: DhcpStaticMapping) -> int:
        """Create a mapping and return its id."""
        await self.client.request(
            "POST",
            API_DHCPD_STATIC_MAPPING,
            data=mapping.to_api_payload(),
            operation="dhcp_static_mapping_create",
        )
        if mapping.mac:
            mapping_id = await self.find_by_mac(mapping.interface, mapping.mac)
        else:
            mapping_id = await self.find_by_cid(mapping.interface, mapping.cid)
        if mapping_id is None:
            key = mapping.mac or mapping.cid
            raise APIError(
                f"Static mapping for {key} was not found on {mapping.interface} after creation",
                context={"interface": mapping.interface, "mac": mapping.mac, "cid": mapping.cid},
            )
        logger.info(f"Created DHCP static mapping {mapping_id} on {mapping.interface}")
        return mapping_id

    async def update(self, interface: str, mapping_id: int, mapping: DhcpStaticMapping) -> DhcpStaticMapping:
        """
        Raises:
            ValidationError: If the mapping would move to another interface
        """
        if mapping.interface != interface:
            raise ValidationError(
                "A static mapping cannot be moved to another interface; delete and recreate it",
                context={"interface": interface, "new_interface": mapping.interface},
            )
        payload = {"id": mapping_id, **mapping.to_api_payload()}
        await self.client.request(
            "PUT", API_DHCPD_STATIC_MAPPING, data=payload, operation="dhcp_static_mapping_update"
        )
        logger.info(f"Updated DHCP static mapping {mapping_id} on {interface}")
        return mapping

    async def delete(self, interface: str, mapping_id: int) -> None:
        await self.client.request(
            "DELETE",
            API_DHCPD_STATIC_MAPPING,
            params={"interface": interface, "id": mapping_id},
            operation="dhcp_static_mapping_delete",
        )
        logger.info(f"Deleted DHCP static mapping {mapping_id} on {interface}")


# ========== MCP TOOLS ==========


@mcp.tool(
    name="pfsense_dhcp_static_mapping_list",
    description="List DHCP static mappings on a pfSense interface",
)
async def pfsense_dhcp_static_mapping_list(ctx: Context, interface: str = "lan") -> str:
    try:
        mappings = await DhcpStaticMappingResource(get_pfsense_client()).list(interface)
        return json.dumps(
            [{"id": i, **m.model_dump(mode="json")} for i, m in mappings.items()], indent=2
        )
    except Exception as e:
        return await handle_tool_error(ctx, "pfsense_dhcp_static_mapping_list", e)


@mcp.tool(name="pfsense_dhcp_static_mapping_get", description="Get a DHCP static mapping by id")
async def pfsense_dhcp_static_mapping_get(ctx: Context, interface: str, id: int) -> str:
    try:
        validate_mapping_id(id, "pfsense_dhcp_static_mapping_get")
        mapping = await DhcpStaticMappingResource(get_pfsense_client()).read(interface, id)
        if mapping is None:
            return f"DHCP static mapping {id} not found on {interface}"
        return json.dumps({"id": id, **mapping.model_dump(mode="json")}, indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "pfsense_dhcp_static_mapping_get", e)


@mcp.tool(name="pfsense_dhcp_static_mapping_create", description="Create a DHCP static mapping")
async def pfsense_dhcp_static_mapping_create(
    ctx: Context,
    interface: str,
    mac: str = "",
    ipaddr: Optional[str] = None,
    hostname: str = "",
    descr: str = "",
    cid: str = "",
    domain: str = "",
    arp_table_static_entry: bool = False,
) -> str:
    """Create a DHCP static mapping.

    Args:
        ctx: MCP context
        interface: pfSense interface, e.g. "lan"
        mac: Client MAC address (aa:bb:cc:dd:ee:ff); may be empty when cid is set
        ipaddr: Reserved IPv4 address
        hostname: Client hostname
        descr: Description
        cid: DHCP client identifier
        domain: Client domain name
        arp_table_static_entry: Create a static ARP entry for this mapping
    """
    try:
        mapping = parse_resource(
            DhcpStaticMapping,
            {
                "interface": interface,
                "mac": mac,
                "ipaddr": ipaddr,
                "hostname": hostname,
                "descr": descr,
                "cid": cid,
                "domain": domain,
                "arp_table_static_entry": arp_table_static_entry,
            },
            "pfsense_dhcp_static_mapping_create",
        )
        mapping_id = await DhcpStaticMappingResource(get_pfsense_client()).create(mapping)
        await ctx.info(f"Created DHCP static mapping {mapping_id} on {interface}")
        return json.dumps({"id": mapping_id, **mapping.model_dump(mode="json")}, indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "pfsense_dhcp_static_mapping_create", e)


@mcp.tool(name="pfsense_dhcp_static_mapping_update", description="Update a DHCP static mapping")
async def pfsense_dhcp_static_mapping_update(
    ctx: Context,
    interface: str,
    id: int,
    mac: str = "",
    ipaddr: Optional[str] = None,
    hostname: str = "",
    descr: str = "",
    cid: str = "",
    domain: str = "",
    arp_table_static_entry: bool = False,
) -> str:
    try:
        validate_mapping_id(id, "pfsense_dhcp_static_mapping_update")
        mapping = parse_resource(
            DhcpStaticMapping,
            {
                "interface": interface,
                "mac": mac,
                "ipaddr": ipaddr,
                "hostname": hostname,
                "descr": descr,
                "cid": cid,
                "domain": domain,
                "arp_table_static_entry": arp_table_static_entry,
            },
            "pfsense_dhcp_static_mapping_update",
        )
        updated = await DhcpStaticMappingResource(get_pfsense_client()).update(interface, id, mapping)
        await ctx.info(f"Updated DHCP static mapping {id} on {interface}")
        return json.dumps({"id": id, **updated.model_dump(mode="json")}, indent=2)
    except Exception as e:
        return await handle_tool_error(ctx, "pfsense_dhcp_static_mapping_update", e)


@mcp.tool(name="pfsense_dhcp_static_mapping_delete", description="Delete a DHCP static mapping")
async def pfsense_dhcp_static_mapping_delete(ctx: Context, interface: str, id: int) -> str:
    try:
        validate_mapping_id(id, "pfsense_dhcp_static_mapping_delete")
        await DhcpStaticMappingResource(get_pfsense_client()).delete(interface, id)
        await ctx.info(f"Deleted DHCP static mapping {id} on {interface}")
        return f"DHCP static mapping {id} on {interface} deleted"
    except Exception as e:
        return await handle_tool_error(ctx, "pfsense_dhcp_static_mapping_delete", e)
