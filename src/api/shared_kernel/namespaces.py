"""Namespace naming for tenant data isolation.

A namespace is the isolated data container that holds one tenant's
principals, projects, units and audit trail. In PostgreSQL it is a schema.
Names are derived from the tenant's store-assigned identity and are the
only handle any component uses to address tenant data.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

ROOT_NAMESPACE = "public"
NAMESPACE_PREFIX = "namespace_"

_TENANT_NAMESPACE_PATTERN = re.compile(rf"{NAMESPACE_PREFIX}[1-9][0-9]*")


@dataclass(frozen=True)
class NamespaceName:
    """Validated namespace identifier.

    Only two shapes are accepted: the root namespace and
    ``namespace_<positive integer>``. Anything else is rejected at
    construction, so a ``NamespaceName`` is always safe to hand to the
    storage layer.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValueError("Namespace name must be a string")
        if self.value != ROOT_NAMESPACE and not _TENANT_NAMESPACE_PATTERN.fullmatch(
            self.value
        ):
            raise ValueError(f"Invalid namespace name: {self.value!r}")

    @classmethod
    def for_tenant(cls, tenant_id: int) -> NamespaceName:
        """Derive the namespace name owned by a tenant.

        This is a pure function of the tenant identity: the same id always
        yields the same name and distinct ids never collide.
        """
        if isinstance(tenant_id, bool) or not isinstance(tenant_id, int):
            raise ValueError("Tenant id must be an integer")
        if tenant_id < 1:
            raise ValueError(f"Tenant id must be positive, got {tenant_id}")
        return cls(value=f"{NAMESPACE_PREFIX}{tenant_id}")

    @classmethod
    def root(cls) -> NamespaceName:
        """The shared namespace holding tenant records and platform admins."""
        return cls(value=ROOT_NAMESPACE)

    @classmethod
    def from_string(cls, value: str) -> NamespaceName:
        """Parse a namespace name received from outside (claims, CLI)."""
        return cls(value=value.strip())

    @property
    def is_root(self) -> bool:
        return self.value == ROOT_NAMESPACE

    @property
    def tenant_id(self) -> int | None:
        """The tenant identity encoded in a tenant namespace name."""
        if self.is_root:
            return None
        return int(self.value[len(NAMESPACE_PREFIX) :])

    def __str__(self) -> str:
        return self.value
