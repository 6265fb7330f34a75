# Overview: All capability definitions organized by category.
# Each capability is defined as: (code, name, description, category)
# Codes match the field names of PermissionSet one-to-one.

from .categories import CapabilityCategory


# -- DASHBOARD --

DASHBOARD_CAPABILITIES = [
    (
        "view_dashboard",
        "View Dashboard",
        "Open the dashboard and the settings page",
        CapabilityCategory.DASHBOARD,
    ),
    (
        "view_reports",
        "View Reports",
        "Access sales, inventory and settlement reports",
        CapabilityCategory.DASHBOARD,
    ),
]


# -- CATALOG --

CATALOG_CAPABILITIES = [
    (
        "manage_products",
        "Manage Products",
        "Create and edit catalog products and their specifications",
        CapabilityCategory.CATALOG,
    ),
]


# -- INVENTORY --

INVENTORY_CAPABILITIES = [
    (
        "manage_inventory",
        "Manage Inventory",
        "View and adjust branch stock levels",
        CapabilityCategory.INVENTORY,
    ),
    (
        "approve_shortages",
        "Approve Shortages",
        "Approve branch shortage requests (requested -> approved)",
        CapabilityCategory.INVENTORY,
    ),
]


# -- SALES --

SALES_CAPABILITIES = [
    (
        "create_sales",
        "Create Sales",
        "Create sales orders and invoices",
        CapabilityCategory.SALES,
    ),
    (
        "override_prices",
        "Override Prices",
        "Sell below a product's minimum sell price",
        CapabilityCategory.SALES,
    ),
    (
        "use_pos",
        "Use POS",
        "Ring up sales at the point of sale",
        CapabilityCategory.SALES,
    ),
]


# -- PARTNERS --

PARTNER_CAPABILITIES = [
    (
        "manage_partners",
        "Manage Partners",
        "Create partners and compare partner product catalogs",
        CapabilityCategory.PARTNERS,
    ),
    (
        "manage_barter",
        "Manage Barter",
        "Compose and finalize barter settlements with partners",
        CapabilityCategory.PARTNERS,
    ),
]


# -- OPERATIONS --

OPERATIONS_CAPABILITIES = [
    (
        "manage_installations",
        "Manage Installations",
        "Schedule and track customer installations",
        CapabilityCategory.OPERATIONS,
    ),
]


# -- ADMINISTRATION --

ADMINISTRATION_CAPABILITIES = [
    (
        "manage_branches",
        "Manage Branches",
        "Create branches and oversee branch operations",
        CapabilityCategory.ADMINISTRATION,
    ),
    (
        "manage_users",
        "Manage Users",
        "Create user accounts and assign roles",
        CapabilityCategory.ADMINISTRATION,
    ),
]


# Combined list of all capabilities
CAPABILITY_DEFINITIONS = (
    DASHBOARD_CAPABILITIES
    + CATALOG_CAPABILITIES
    + INVENTORY_CAPABILITIES
    + SALES_CAPABILITIES
    + PARTNER_CAPABILITIES
    + OPERATIONS_CAPABILITIES
    + ADMINISTRATION_CAPABILITIES
)
