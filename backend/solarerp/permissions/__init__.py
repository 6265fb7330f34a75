# Overview: Permission system package.
# Re-exports all public APIs so callers import from solarerp.permissions.

from .categories import CapabilityCategory
from .definitions import (
    CAPABILITY_DEFINITIONS,
    DASHBOARD_CAPABILITIES,
    CATALOG_CAPABILITIES,
    INVENTORY_CAPABILITIES,
    SALES_CAPABILITIES,
    PARTNER_CAPABILITIES,
    OPERATIONS_CAPABILITIES,
    ADMINISTRATION_CAPABILITIES,
)
from .roles import Role, PermissionSet, ROLE_PERMISSIONS
from .resolver import (
    ConfigurationError,
    PermissionResolver,
    DEFAULT_RESOLVER,
    coerce_role,
    get_permissions,
    has_permission,
    validate_capability_catalogue,
    validate_permission_table,
)
from .catalogue import (
    CAPABILITIES,
    Capability,
    get_all_capability_codes,
    get_capabilities_by_category,
    get_capability_definition,
    validate_capability_code,
)

__all__ = [
    "CapabilityCategory",
    "CAPABILITY_DEFINITIONS",
    "DASHBOARD_CAPABILITIES",
    "CATALOG_CAPABILITIES",
    "INVENTORY_CAPABILITIES",
    "SALES_CAPABILITIES",
    "PARTNER_CAPABILITIES",
    "OPERATIONS_CAPABILITIES",
    "ADMINISTRATION_CAPABILITIES",
    "Role",
    "PermissionSet",
    "ROLE_PERMISSIONS",
    "ConfigurationError",
    "PermissionResolver",
    "DEFAULT_RESOLVER",
    "coerce_role",
    "get_permissions",
    "has_permission",
    "validate_capability_catalogue",
    "validate_permission_table",
    "CAPABILITIES",
    "Capability",
    "get_all_capability_codes",
    "get_capabilities_by_category",
    "get_capability_definition",
    "validate_capability_code",
]
