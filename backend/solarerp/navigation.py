# Overview: Page access and landing rules for the front-end shell.

"""
Navigation Policy

Pages are gated by a single capability each. The cashier rule is a routing
convention, not a capability: a cashier always lands on the POS page,
whatever page was requested, and it is decided by inspecting the role.
"""

from __future__ import annotations

from .permissions import PermissionResolver, Role, coerce_role
from .validation import ValidationError


POS_PAGE = "pos"

# Sidebar order
PAGES = [
    "dashboard",
    "pos",
    "sales",
    "products",
    "inventory",
    "partners",
    "partner-products",
    "barter",
    "installations",
    "branches",
    "settings",
]

PAGE_CAPABILITIES = {
    "dashboard": "view_dashboard",
    "pos": "use_pos",
    "sales": "create_sales",
    "products": "manage_products",
    "inventory": "manage_inventory",
    "partners": "manage_partners",
    "partner-products": "manage_partners",
    "barter": "manage_barter",
    "installations": "manage_installations",
    "branches": "manage_branches",
    "settings": "view_dashboard",
}


def is_pos_only(role: Role | str | None) -> bool:
    return role is not None and coerce_role(role) is Role.CASHIER


def can_access_page(resolver: PermissionResolver, role: Role | str | None, page: str) -> bool:
    if page not in PAGE_CAPABILITIES:
        raise ValidationError(f"Unknown page: {page}")
    return resolver.has_permission(role, PAGE_CAPABILITIES[page])


def visible_pages(resolver: PermissionResolver, role: Role | str | None) -> list[str]:
    """Pages shown in the sidebar for a role."""
    if role is None:
        return []
    if is_pos_only(role):
        return [POS_PAGE]
    return [page for page in PAGES if can_access_page(resolver, role, page)]


def resolve_page(resolver: PermissionResolver, role: Role | str | None, requested: str) -> str | None:
    """
    Page to render for a request.

    Returns None when the page is locked for the role.
    """
    if requested not in PAGE_CAPABILITIES:
        raise ValidationError(f"Unknown page: {requested}")
    if is_pos_only(role):
        return POS_PAGE
    if can_access_page(resolver, role, requested):
        return requested
    return None


def landing_page(resolver: PermissionResolver, role: Role | str | None) -> str | None:
    pages = visible_pages(resolver, role)
    return pages[0] if pages else None
