"""Unit tests for the Principal aggregate."""

import pytest

from iam.domain.aggregates import Principal
from iam.domain.value_objects import Role
from shared_kernel.validation import ValidationError


class TestCreateTenantUser:
    def test_normalizes_email_and_trims_name(self):
        principal = Principal.create_tenant_user(
            name="  Ada Lovelace ",
            email=" Ada@Example.COM ",
            password_hash="hashed",
            role="Sales",
            tenant_id=7,
        )

        assert principal.name == "Ada Lovelace"
        assert principal.email == "ada@example.com"
        assert principal.role is Role.SALES
        assert principal.tenant_id == 7
        assert principal.is_active is True
        assert principal.id is None

    def test_super_admin_role_is_refused_in_a_tenant(self):
        with pytest.raises(ValidationError):
            Principal.create_tenant_user(
                name="Mallory",
                email="m@example.com",
                password_hash="hashed",
                role=Role.SUPER_ADMIN,
                tenant_id=7,
            )

    def test_unknown_role_is_refused(self):
        with pytest.raises(ValidationError, match="Unknown role"):
            Principal.create_tenant_user(
                name="Mallory",
                email="m@example.com",
                password_hash="hashed",
                role="Owner",
                tenant_id=7,
            )

    @pytest.mark.parametrize("email", ["", "not-an-email", "a@b", "a b@c.com"])
    def test_invalid_email_is_refused(self, email):
        with pytest.raises(ValidationError):
            Principal.create_tenant_user(
                name="Ada",
                email=email,
                password_hash="hashed",
                role="Viewer",
                tenant_id=7,
            )

    def test_short_name_is_refused(self):
        with pytest.raises(ValidationError):
            Principal.create_tenant_user(
                name="Al",
                email="al@example.com",
                password_hash="hashed",
                role="Viewer",
                tenant_id=7,
            )


class TestCreatePlatformAdmin:
    def test_has_no_tenant(self):
        principal = Principal.create_platform_admin(
            name="Root Admin", email="root@example.com", password_hash="hashed"
        )

        assert principal.is_platform_admin
        assert principal.tenant_id is None


class TestUpdate:
    def _principal(self) -> Principal:
        return Principal.create_tenant_user(
            name="Ada",
            email="ada@example.com",
            password_hash="hashed",
            role="Viewer",
            tenant_id=7,
        )

    def test_only_given_fields_change(self):
        principal = self._principal()

        principal.update(role="Admin")

        assert principal.role is Role.ADMIN
        assert principal.name == "Ada"
        assert principal.email == "ada@example.com"

    def test_cannot_be_promoted_to_platform_admin(self):
        principal = self._principal()

        with pytest.raises(ValidationError):
            principal.update(role=Role.SUPER_ADMIN)
        assert principal.role is Role.VIEWER

    def test_deactivate(self):
        principal = self._principal()

        principal.deactivate()

        assert principal.is_active is False
