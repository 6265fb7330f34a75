# Overview: Capability category constants for grouping related capabilities.


class CapabilityCategory:
    """Capability categories for organization and UI display."""
    DASHBOARD = "DASHBOARD"
    CATALOG = "CATALOG"
    INVENTORY = "INVENTORY"
    SALES = "SALES"
    PARTNERS = "PARTNERS"
    OPERATIONS = "OPERATIONS"
    ADMINISTRATION = "ADMINISTRATION"
