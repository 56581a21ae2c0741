"""
pfSense Provider - API Endpoint Constants

pfSense REST API v1 paths. They are appended to the provider url as-is.
"""

# System
API_SYSTEM_VERSION = "/api/v1/system/version"

# Firewall aliases
API_FIREWALL_ALIAS = "/api/v1/firewall/alias"

# DHCP server static mappings
API_DHCPD_STATIC_MAPPING = "/api/v1/services/dhcpd/static_mapping"

# Resource type names as registered by the provider
RESOURCE_FIREWALL_ALIAS = "pfsense_firewall_alias"
RESOURCE_DHCP_STATIC_MAPPING = "pfsense_dhcp_static_mapping"
