"""Unit tests for the Tenant aggregate."""

import pytest

from shared_kernel.namespaces import NamespaceName
from shared_kernel.validation import ValidationError
from tenancy.domain.aggregates import Tenant, TenantMetadata
from tenancy.domain.value_objects import SubscriptionTier, TenantId


def _metadata(**overrides) -> TenantMetadata:
    fields = {
        "name": "Acme Builders",
        "contact": "Owner@Acme.com",
        "subscription_tier": "Basic",
    }
    fields.update(overrides)
    return TenantMetadata.create(**fields)


class TestTenantMetadata:
    def test_normalizes_fields(self):
        metadata = _metadata(name="  Acme Builders ")

        assert metadata.name == "Acme Builders"
        assert metadata.contact == "owner@acme.com"
        assert metadata.subscription_tier is SubscriptionTier.BASIC

    def test_rejects_unknown_tier(self):
        with pytest.raises(ValidationError, match="Basic or Premium"):
            _metadata(subscription_tier="Gold")

    def test_rejects_bad_contact(self):
        with pytest.raises(ValidationError, match="Contact"):
            _metadata(contact="nobody")


class TestTenantLifecycle:
    def test_draft_is_inactive_without_namespace(self):
        tenant = Tenant.draft(_metadata())

        assert tenant.id is None
        assert tenant.namespace is None
        assert not tenant.is_active

    def test_namespace_requires_identity(self):
        with pytest.raises(ValueError, match="stored"):
            Tenant.draft(_metadata()).assign_namespace()

    def test_namespace_is_derived_from_identity(self):
        tenant = Tenant.draft(_metadata())
        tenant.id = TenantId(12)

        assert tenant.assign_namespace() == NamespaceName.for_tenant(12)
        assert tenant.namespace.value == "namespace_12"

    def test_namespace_never_changes(self):
        tenant = Tenant.draft(_metadata())
        tenant.id = TenantId(12)
        tenant.namespace = NamespaceName.for_tenant(99)

        with pytest.raises(ValueError, match="already owns"):
            tenant.assign_namespace()

    def test_cannot_activate_without_namespace(self):
        with pytest.raises(ValueError):
            Tenant.draft(_metadata()).activate()

    def test_activate_and_deactivate_report_changes(self):
        tenant = Tenant.draft(_metadata())
        tenant.id = TenantId(1)
        tenant.assign_namespace()

        assert tenant.activate() is True
        assert tenant.activate() is False
        assert tenant.deactivate() is True
        assert tenant.deactivate() is False

    def test_update_metadata_reports_whether_anything_changed(self):
        tenant = Tenant.draft(_metadata())

        assert tenant.update_metadata(name="Acme Builders") is False
        assert tenant.update_metadata(subscription_tier="Premium") is True
        assert tenant.subscription_tier is SubscriptionTier.PREMIUM


class TestTenantId:
    def test_from_string(self):
        assert TenantId.from_string("15") == TenantId(15)

    @pytest.mark.parametrize("value", ["", "abc", "-1", "0"])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            TenantId.from_string(value)
