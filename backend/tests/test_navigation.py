"""
Page visibility and routing rules, including the cashier POS redirect.
"""

import pytest

from solarerp import navigation
from solarerp.navigation import PAGE_CAPABILITIES, PAGES, POS_PAGE
from solarerp.permissions import DEFAULT_RESOLVER, Role, get_all_capability_codes
from solarerp.validation import ValidationError


resolver = DEFAULT_RESOLVER


def test_every_page_maps_to_a_known_capability():
    assert set(PAGES) == set(PAGE_CAPABILITIES)
    assert set(PAGE_CAPABILITIES.values()) <= set(get_all_capability_codes())


class TestCashierRouting:

    @pytest.mark.parametrize("page", PAGES)
    def test_cashier_always_lands_on_pos(self, page):
        assert navigation.resolve_page(resolver, Role.CASHIER, page) == POS_PAGE

    def test_cashier_sees_only_pos(self):
        assert navigation.visible_pages(resolver, Role.CASHIER) == [POS_PAGE]
        assert navigation.landing_page(resolver, "cashier") == POS_PAGE

    def test_only_cashier_is_pos_only(self):
        assert [r for r in Role if navigation.is_pos_only(r)] == [Role.CASHIER]
        assert navigation.is_pos_only(None) is False


class TestResolvePage:

    def test_super_admin_reaches_every_page(self):
        for page in PAGES:
            assert navigation.resolve_page(resolver, Role.SUPER_ADMIN, page) == page

    def test_locked_page_returns_none(self):
        assert navigation.resolve_page(resolver, Role.INSTALLER, "barter") is None
        assert navigation.resolve_page(resolver, Role.SALES_MANAGER, "products") is None

    def test_no_role_is_locked_out(self):
        assert navigation.resolve_page(resolver, None, "dashboard") is None

    def test_unknown_page(self):
        with pytest.raises(ValidationError):
            navigation.resolve_page(resolver, Role.SUPER_ADMIN, "payroll")


class TestVisiblePages:

    def test_partner_manager(self):
        assert navigation.visible_pages(resolver, Role.PARTNER_MANAGER) == [
            "dashboard", "partners", "partner-products", "barter", "settings",
        ]

    def test_installer(self):
        assert navigation.visible_pages(resolver, Role.INSTALLER) == [
            "dashboard", "installations", "settings",
        ]

    def test_pages_follow_sidebar_order(self):
        pages = navigation.visible_pages(resolver, Role.SUPER_ADMIN)
        assert pages == PAGES

    def test_no_role_sees_nothing(self):
        assert navigation.visible_pages(resolver, None) == []
        assert navigation.landing_page(resolver, None) is None

    @pytest.mark.parametrize("role", [r for r in Role if r is not Role.CASHIER])
    def test_landing_is_dashboard_for_non_cashiers(self, role):
        assert navigation.landing_page(resolver, role) == "dashboard"


class TestNavigationApi:

    def test_requires_auth(self, client, db_session):
        assert client.get('/api/navigation').status_code == 401

    def test_cashier_navigation(self, client, headers_for):
        response = client.get('/api/navigation', headers=headers_for(Role.CASHIER))
        assert response.status_code == 200
        assert response.json == {
            "role": "cashier",
            "pages": ["pos"],
            "landing_page": "pos",
            "pos_only": True,
        }

    def test_resolve_redirects_cashier(self, client, headers_for):
        response = client.get('/api/navigation/resolve?page=barter', headers=headers_for(Role.CASHIER))
        assert response.status_code == 200
        assert response.json == {"requested": "barter", "page": "pos", "allowed": True}

    def test_resolve_locked_page(self, client, headers_for):
        response = client.get('/api/navigation/resolve?page=branches', headers=headers_for(Role.INSTALLER))
        assert response.status_code == 200
        assert response.json["page"] is None
        assert response.json["allowed"] is False

    @pytest.mark.parametrize("query", ["", "?page=", "?page=payroll"])
    def test_resolve_bad_page(self, client, headers_for, query):
        response = client.get(f'/api/navigation/resolve{query}', headers=headers_for(Role.SUPER_ADMIN))
        assert response.status_code == 400
