"""Unit tests for the role permission matrix."""

import pytest

from iam.domain.value_objects import Action, Resource, Role, has_permission


class TestHasPermission:
    @pytest.mark.parametrize(
        "action", [Action.CREATE, Action.READ, Action.ACTIVATE, Action.DEACTIVATE]
    )
    def test_super_admin_manages_tenants(self, action):
        assert has_permission(Role.SUPER_ADMIN, Resource.TENANTS, action)

    @pytest.mark.parametrize(
        "resource", [Resource.USERS, Resource.PROJECTS, Resource.UNITS]
    )
    def test_super_admin_holds_nothing_inside_tenants(self, resource):
        assert not has_permission(Role.SUPER_ADMIN, resource, Action.READ)

    @pytest.mark.parametrize("role", Role.tenant_roles())
    def test_tenant_roles_cannot_touch_tenants(self, role):
        assert not has_permission(role, Resource.TENANTS, Action.READ)
        assert not has_permission(role, Resource.STATS, Action.READ)

    def test_admin_manages_users(self):
        assert has_permission(Role.ADMIN, Resource.USERS, Action.DELETE)
        assert not has_permission(Role.SALES, Resource.USERS, Action.READ)

    def test_sales_books_but_does_not_sell(self):
        assert has_permission(Role.SALES, Resource.UNITS, Action.BOOK)
        assert not has_permission(Role.SALES, Resource.UNITS, Action.SELL)
        assert has_permission(Role.ADMIN, Resource.UNITS, Action.SELL)

    def test_viewer_is_read_only(self):
        assert has_permission(Role.VIEWER, Resource.PROJECTS, Action.READ)
        assert not has_permission(Role.VIEWER, Resource.PROJECTS, Action.CREATE)
        assert not has_permission(Role.VIEWER, Resource.UNITS, Action.BOOK)

    def test_role_strings_are_accepted(self):
        assert has_permission("Admin", Resource.PROJECTS, Action.CREATE)

    def test_unknown_role_has_no_permissions(self):
        assert not has_permission("Owner", Resource.PROJECTS, Action.READ)
