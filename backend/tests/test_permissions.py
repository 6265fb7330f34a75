"""
Role/capability table tests.

Verifies:
- Every role has a complete, boolean-only permission set
- has_permission fails closed (no role, unknown capability)
- super_admin is the only role holding every capability
- Table defects raise ConfigurationError at construction
"""

from dataclasses import FrozenInstanceError, replace
from types import MappingProxyType

import pytest

from solarerp.permissions import (
    CAPABILITIES,
    CAPABILITY_DEFINITIONS,
    CapabilityCategory,
    ConfigurationError,
    PermissionResolver,
    PermissionSet,
    ROLE_PERMISSIONS,
    Role,
    get_all_capability_codes,
    get_capabilities_by_category,
    get_capability_definition,
    get_permissions,
    has_permission,
    validate_capability_catalogue,
    validate_capability_code,
)


CAPABILITIES = PermissionSet.field_names()


class TestPermissionSetShape:

    def test_thirteen_capabilities(self):
        assert len(CAPABILITIES) == 13

    @pytest.mark.parametrize("role", list(Role))
    def test_every_role_has_complete_boolean_set(self, role):
        permission_set = get_permissions(role)
        as_dict = permission_set.to_dict()
        assert set(as_dict) == set(CAPABILITIES)
        assert all(type(value) is bool for value in as_dict.values())

    def test_capability_catalogue_matches_fields(self):
        assert sorted(get_all_capability_codes()) == sorted(CAPABILITIES)
        assert len(CAPABILITY_DEFINITIONS) == len(set(get_all_capability_codes()))

    def test_permission_set_is_frozen(self):
        with pytest.raises(FrozenInstanceError):
            get_permissions(Role.CASHIER).manage_users = True

    def test_table_is_read_only(self):
        assert isinstance(ROLE_PERMISSIONS, MappingProxyType)
        with pytest.raises(TypeError):
            ROLE_PERMISSIONS[Role.CASHIER] = get_permissions(Role.SUPER_ADMIN)

    def test_rows_are_authored_independently(self):
        rows = list(ROLE_PERMISSIONS.values())
        assert len({id(row) for row in rows}) == len(rows)


class TestHasPermission:

    @pytest.mark.parametrize("capability", CAPABILITIES)
    def test_no_role_never_has_permission(self, capability):
        assert has_permission(None, capability) is False

    def test_cashier_pos_only(self):
        assert has_permission(Role.CASHIER, "use_pos") is True
        assert has_permission("cashier", "use_pos") is True
        assert has_permission(Role.CASHIER, "manage_branches") is False
        assert has_permission(Role.CASHIER, "manage_barter") is False

    @pytest.mark.parametrize("capability", CAPABILITIES)
    def test_super_admin_has_everything(self, capability):
        assert has_permission(Role.SUPER_ADMIN, capability) is True

    @pytest.mark.parametrize("role", [r for r in Role if r is not Role.SUPER_ADMIN])
    def test_only_super_admin_has_full_access(self, role):
        assert not all(has_permission(role, cap) for cap in CAPABILITIES)

    def test_unknown_capability_is_false_not_error(self):
        assert has_permission(Role.SUPER_ADMIN, "launch_rockets") is False
        assert has_permission(Role.SUPER_ADMIN, "can_use_pos") is False
        assert has_permission(Role.SUPER_ADMIN, "field_names") is False

    def test_partner_manager_owns_barter(self):
        assert has_permission(Role.PARTNER_MANAGER, "manage_barter") is True
        assert has_permission(Role.PARTNER_MANAGER, "manage_partners") is True
        assert has_permission(Role.BRANCH_MANAGER, "manage_barter") is False

    def test_installer_limited_to_installations(self):
        granted = get_permissions(Role.INSTALLER).granted()
        assert granted == ["view_dashboard", "manage_installations"]

    def test_roles_with(self):
        resolver = PermissionResolver()
        assert resolver.roles_with("manage_users") == [Role.SUPER_ADMIN]
        assert Role.CASHIER in resolver.roles_with("use_pos")
        assert resolver.roles_with("no_such_capability") == []


class TestConfigurationErrors:

    def test_unknown_role_string(self):
        with pytest.raises(ConfigurationError):
            get_permissions("accountant")

    def test_unknown_role_in_has_permission(self):
        with pytest.raises(ConfigurationError):
            has_permission("accountant", "use_pos")

    def test_missing_role_row(self):
        table = {role: row for role, row in ROLE_PERMISSIONS.items() if role is not Role.INSTALLER}
        with pytest.raises(ConfigurationError, match="installer"):
            PermissionResolver(table)

    def test_non_boolean_flag(self):
        table = dict(ROLE_PERMISSIONS)
        table[Role.CASHIER] = replace(table[Role.CASHIER], use_pos=1)
        with pytest.raises(ConfigurationError, match="use_pos"):
            PermissionResolver(table)

    def test_wrong_row_type(self):
        table = dict(ROLE_PERMISSIONS)
        table[Role.CASHIER] = {"use_pos": True}
        with pytest.raises(ConfigurationError):
            PermissionResolver(table)

    def test_non_role_key(self):
        table = dict(ROLE_PERMISSIONS)
        table["accountant"] = ROLE_PERMISSIONS[Role.CASHIER]
        with pytest.raises(ConfigurationError):
            PermissionResolver(table)

    def test_resolver_copies_table(self):
        table = dict(ROLE_PERMISSIONS)
        resolver = PermissionResolver(table)
        table[Role.CASHIER] = ROLE_PERMISSIONS[Role.SUPER_ADMIN]
        assert resolver.has_permission(Role.CASHIER, "manage_users") is False


class TestCapabilityHelpers:

    def test_definition_lookup(self):
        definition = get_capability_definition("manage_barter")
        assert definition["category"] == CapabilityCategory.PARTNERS
        assert definition["name"] == "Manage Barter"
        assert get_capability_definition("nope") is None

    def test_by_category(self):
        codes = [cap.code for cap in get_capabilities_by_category(CapabilityCategory.SALES)]
        assert codes == ["create_sales", "override_prices", "use_pos"]

    def test_validate_code(self):
        assert validate_capability_code("use_pos")
        assert not validate_capability_code("USE_POS")

    def test_definition_is_a_copy(self):
        get_capability_definition("use_pos")["name"] = "changed"
        assert CAPABILITIES["use_pos"].name == "Use POS"

    def test_catalogue_is_read_only(self):
        with pytest.raises(TypeError):
            CAPABILITIES["fly"] = CAPABILITIES["use_pos"]


class TestCapabilityCatalogueValidation:

    def test_shipped_catalogue_is_valid(self):
        validate_capability_catalogue()

    def test_missing_definition(self):
        definitions = [d for d in CAPABILITY_DEFINITIONS if d[0] != "approve_shortages"]
        with pytest.raises(ConfigurationError, match="approve_shortages"):
            validate_capability_catalogue(definitions)

    def test_definition_without_field(self):
        definitions = CAPABILITY_DEFINITIONS + [("fly", "Fly", "Take off", CapabilityCategory.OPERATIONS)]
        with pytest.raises(ConfigurationError, match="fly"):
            validate_capability_catalogue(definitions)

    def test_duplicate_code(self):
        definitions = CAPABILITY_DEFINITIONS + [CAPABILITY_DEFINITIONS[0]]
        with pytest.raises(ConfigurationError, match="Duplicate"):
            validate_capability_catalogue(definitions)

    def test_permission_table_validation_checks_catalogue(self, monkeypatch):
        from solarerp.permissions import resolver

        broken = [d for d in CAPABILITY_DEFINITIONS if d[0] != "use_pos"]
        monkeypatch.setattr(resolver, "CAPABILITY_DEFINITIONS", broken)
        with pytest.raises(ConfigurationError, match="use_pos"):
            PermissionResolver(ROLE_PERMISSIONS)
