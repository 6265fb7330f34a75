# Overview: Role -> PermissionSet lookup and single-capability checks.

"""
Permission Resolver

WHY: One read-only lookup answers "can this role do X". The resolver never
logs, prompts or retries; callers decide how to surface a denial.

DESIGN PRINCIPLES:
- Fail closed: absent role or unknown capability -> False
- A denial is a normal result, not an exception
- A role without a table row is a configuration defect -> ConfigurationError
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Sequence

from .definitions import CAPABILITY_DEFINITIONS
from .roles import ROLE_PERMISSIONS, PermissionSet, Role


class ConfigurationError(Exception):
    """Raised when the static role/capability table is incomplete or malformed."""
    pass


def coerce_role(role: Role | str) -> Role:
    """Turn a role name into a Role, raising ConfigurationError for unknown names."""
    if isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        raise ConfigurationError(f"Unknown role: {role!r}") from None


def validate_capability_catalogue(definitions: Sequence[tuple] | None = None) -> None:
    """Capability definitions and PermissionSet fields must name the same codes, once each."""
    if definitions is None:
        definitions = CAPABILITY_DEFINITIONS
    codes = [definition[0] for definition in definitions]
    duplicates = sorted({code for code in codes if codes.count(code) > 1})
    if duplicates:
        raise ConfigurationError(f"Duplicate capability codes: {', '.join(duplicates)}")

    fields = set(PermissionSet.field_names())
    undefined = sorted(fields - set(codes))
    if undefined:
        raise ConfigurationError(f"PermissionSet fields without a definition: {', '.join(undefined)}")
    unknown = sorted(set(codes) - fields)
    if unknown:
        raise ConfigurationError(f"Capability definitions without a PermissionSet field: {', '.join(unknown)}")


def validate_permission_table(table: Mapping) -> None:
    """
    Check that every Role has exactly one well-formed PermissionSet row,
    after checking the capability catalogue against PermissionSet.

    Raises ConfigurationError on the first defect found.
    """
    validate_capability_catalogue()

    for role in Role:
        if role not in table:
            raise ConfigurationError(f"No permission set defined for role '{role.value}'")

    for role, permission_set in table.items():
        if not isinstance(role, Role):
            raise ConfigurationError(f"Permission table key is not a Role: {role!r}")
        if not isinstance(permission_set, PermissionSet):
            raise ConfigurationError(f"Permission set for '{role.value}' has the wrong type")
        for name in PermissionSet.field_names():
            if not isinstance(getattr(permission_set, name), bool):
                raise ConfigurationError(
                    f"Capability '{name}' for role '{role.value}' must be a boolean"
                )


class PermissionResolver:
    """Immutable role -> capability lookup, validated once at construction."""

    def __init__(self, table: Mapping[Role, PermissionSet] = ROLE_PERMISSIONS):
        validate_permission_table(table)
        self._table = MappingProxyType(dict(table))

    @property
    def table(self) -> Mapping[Role, PermissionSet]:
        return self._table

    def get_permissions(self, role: Role | str) -> PermissionSet:
        role = coerce_role(role)
        try:
            return self._table[role]
        except KeyError:
            raise ConfigurationError(f"No permission set defined for role '{role.value}'") from None

    def has_permission(self, role: Role | str | None, capability: str) -> bool:
        if role is None:
            return False
        permission_set = self.get_permissions(role)
        if capability not in PermissionSet.field_names():
            return False
        return getattr(permission_set, capability) is True

    def roles_with(self, capability: str) -> list[Role]:
        """Roles granted a capability, in Role declaration order."""
        return [role for role in Role if self.has_permission(role, capability)]


DEFAULT_RESOLVER = PermissionResolver()


def get_permissions(role: Role | str) -> PermissionSet:
    """Look up the PermissionSet for a role using the default table."""
    return DEFAULT_RESOLVER.get_permissions(role)


def has_permission(role: Role | str | None, capability: str) -> bool:
    """Check one capability for a role using the default table."""
    return DEFAULT_RESOLVER.has_permission(role, capability)
