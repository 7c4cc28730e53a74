"""Tenant aggregate for the tenancy context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from shared_kernel.namespaces import NamespaceName
from shared_kernel.validation import (
    ValidationError,
    validate_display_name,
    validate_email,
)
from tenancy.domain.value_objects import SubscriptionTier, TenantId


def validate_subscription_tier(value: str | SubscriptionTier) -> SubscriptionTier:
    try:
        return SubscriptionTier(value)
    except ValueError as e:
        raise ValidationError(
            "Subscription type must be either Basic or Premium"
        ) from e


@dataclass(frozen=True)
class TenantMetadata:
    """Validated descriptive fields of a tenant.

    Display names are not unique; two tenants may share one.
    """

    name: str
    contact: str
    subscription_tier: SubscriptionTier

    @classmethod
    def create(
        cls,
        name: str,
        contact: str,
        subscription_tier: str | SubscriptionTier,
    ) -> TenantMetadata:
        """Validate raw input.

        Raises:
            ValidationError: If any field violates its rule
        """
        return cls(
            name=validate_display_name(name, "Tenant name"),
            contact=validate_email(contact, "Contact"),
            subscription_tier=validate_subscription_tier(subscription_tier),
        )


@dataclass
class Tenant:
    """Tenant aggregate: one builder organisation and its namespace.

    Business rules:
    - The id is assigned by the store; the namespace name is derived from it
    - A tenant can only become active once it owns a namespace
    - The namespace never changes once assigned
    - Tenants are never deleted; deactivation is the only removal path
    """

    name: str
    contact: str
    subscription_tier: SubscriptionTier
    id: TenantId | None = None
    namespace: NamespaceName | None = None
    is_active: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def draft(cls, metadata: TenantMetadata) -> Tenant:
        """Create an inactive tenant that has not been stored yet."""
        return cls(
            name=metadata.name,
            contact=metadata.contact,
            subscription_tier=metadata.subscription_tier,
        )

    def assign_namespace(self) -> NamespaceName:
        """Derive and record the namespace from the assigned identity.

        Returns:
            The namespace name this tenant owns

        Raises:
            ValueError: If the tenant has no identity yet, or already owns
                a different namespace
        """
        if self.id is None:
            raise ValueError("Tenant must be stored before a namespace is assigned")

        namespace = NamespaceName.for_tenant(self.id.value)
        if self.namespace is not None and self.namespace != namespace:
            raise ValueError(
                f"Tenant {self.id} already owns namespace {self.namespace}"
            )
        self.namespace = namespace
        return namespace

    def activate(self) -> bool:
        """Mark the tenant active.

        Returns:
            True if the state changed, False if it was already active

        Raises:
            ValueError: If the tenant has no namespace
        """
        if self.namespace is None:
            raise ValueError("Tenant cannot be activated without a namespace")
        if self.is_active:
            return False
        self.is_active = True
        return True

    def deactivate(self) -> bool:
        """Mark the tenant inactive.

        Returns:
            True if the state changed, False if it was already inactive
        """
        if not self.is_active:
            return False
        self.is_active = False
        return True

    def update_metadata(
        self,
        name: str | None = None,
        contact: str | None = None,
        subscription_tier: str | SubscriptionTier | None = None,
    ) -> bool:
        """Apply validated metadata changes.

        Returns:
            True if any field changed

        Raises:
            ValidationError: If a provided value violates its rule
        """
        changed = False
        if name is not None:
            new_name = validate_display_name(name, "Tenant name")
            changed = changed or new_name != self.name
            self.name = new_name
        if contact is not None:
            new_contact = validate_email(contact, "Contact")
            changed = changed or new_contact != self.contact
            self.contact = new_contact
        if subscription_tier is not None:
            new_tier = validate_subscription_tier(subscription_tier)
            changed = changed or new_tier != self.subscription_tier
            self.subscription_tier = new_tier
        return changed
