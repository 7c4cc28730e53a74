"""Aggregates for the tenancy domain."""

from tenancy.domain.aggregates.tenant import Tenant, TenantMetadata

__all__ = ["Tenant", "TenantMetadata"]
