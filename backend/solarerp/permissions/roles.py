# Overview: User roles and the static role -> capability table.

"""
Role Capability Table

WHY: Each role's capabilities are written out in full. No row is derived
from another (no inheritance, union or negation), so editing one role can
never silently change another.

- super_admin: the only role with every capability
- branch_manager: runs one branch (stock, sales, installations)
- sales_manager: sales and pricing
- inventory_manager: catalog, stock and shortage approvals
- cashier: point of sale only
- partner_manager: partners, partner catalogs and barter
- installer: installations only
"""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, fields
from types import MappingProxyType


class Role(str, enum.Enum):
    SUPER_ADMIN = "super_admin"
    BRANCH_MANAGER = "branch_manager"
    SALES_MANAGER = "sales_manager"
    INVENTORY_MANAGER = "inventory_manager"
    CASHIER = "cashier"
    PARTNER_MANAGER = "partner_manager"
    INSTALLER = "installer"


@dataclass(frozen=True)
class PermissionSet:
    """Fixed-shape record of capability flags for one role."""
    view_dashboard: bool
    manage_products: bool
    manage_inventory: bool
    create_sales: bool
    override_prices: bool
    manage_partners: bool
    manage_barter: bool
    manage_installations: bool
    manage_branches: bool
    view_reports: bool
    manage_users: bool
    approve_shortages: bool
    use_pos: bool

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def granted(self) -> list[str]:
        """Capability codes set to True, in field order."""
        return [name for name in self.field_names() if getattr(self, name) is True]

    def to_dict(self) -> dict:
        return asdict(self)


ROLE_PERMISSIONS = MappingProxyType({
    Role.SUPER_ADMIN: PermissionSet(
        view_dashboard=True,
        manage_products=True,
        manage_inventory=True,
        create_sales=True,
        override_prices=True,
        manage_partners=True,
        manage_barter=True,
        manage_installations=True,
        manage_branches=True,
        view_reports=True,
        manage_users=True,
        approve_shortages=True,
        use_pos=True,
    ),

    Role.BRANCH_MANAGER: PermissionSet(
        view_dashboard=True,
        manage_products=False,
        manage_inventory=True,
        create_sales=True,
        override_prices=True,
        manage_partners=False,
        manage_barter=False,
        manage_installations=True,
        manage_branches=False,  # HQ oversight only
        view_reports=True,
        manage_users=False,
        approve_shortages=False,  # Branches raise shortages, HQ approves
        use_pos=True,
    ),

    Role.SALES_MANAGER: PermissionSet(
        view_dashboard=True,
        manage_products=False,
        manage_inventory=False,
        create_sales=True,
        override_prices=True,
        manage_partners=False,
        manage_barter=False,
        manage_installations=False,
        manage_branches=False,
        view_reports=True,
        manage_users=False,
        approve_shortages=False,
        use_pos=True,
    ),

    Role.INVENTORY_MANAGER: PermissionSet(
        view_dashboard=True,
        manage_products=True,
        manage_inventory=True,
        create_sales=False,
        override_prices=False,
        manage_partners=False,
        manage_barter=False,
        manage_installations=False,
        manage_branches=False,
        view_reports=True,
        manage_users=False,
        approve_shortages=True,
        use_pos=False,
    ),

    Role.CASHIER: PermissionSet(
        view_dashboard=False,
        manage_products=False,
        manage_inventory=False,
        create_sales=True,  # POS tickets are sales
        override_prices=False,
        manage_partners=False,
        manage_barter=False,
        manage_installations=False,
        manage_branches=False,
        view_reports=False,
        manage_users=False,
        approve_shortages=False,
        use_pos=True,
    ),

    Role.PARTNER_MANAGER: PermissionSet(
        view_dashboard=True,
        manage_products=False,
        manage_inventory=False,
        create_sales=False,
        override_prices=False,
        manage_partners=True,
        manage_barter=True,
        manage_installations=False,
        manage_branches=False,
        view_reports=True,
        manage_users=False,
        approve_shortages=False,
        use_pos=False,
    ),

    Role.INSTALLER: PermissionSet(
        view_dashboard=True,
        manage_products=False,
        manage_inventory=False,
        create_sales=False,
        override_prices=False,
        manage_partners=False,
        manage_barter=False,
        manage_installations=True,
        manage_branches=False,
        view_reports=False,
        manage_users=False,
        approve_shortages=False,
        use_pos=False,
    ),
})
