"""Request context value object for the resolved namespace.

This module contains the pure value object that represents a fully
resolved request. It is framework-agnostic and contains no business
logic, making it safe for the shared kernel.

The actual resolution logic (claim validation, tenant lookup, activity
checks) lives in the tenancy bounded context.
"""

from __future__ import annotations

from dataclasses import dataclass

from shared_kernel.namespaces import NamespaceName


@dataclass(frozen=True)
class RequestContext:
    """Resolved namespace and identity for the current request.

    A RequestContext only exists once resolution succeeded; data access
    code receives one instead of reading any ambient state.

    Attributes:
        namespace: The namespace every data access of the request targets.
        tenant_id: The owning tenant, or None for platform administrators.
        principal_id: Identity of the authenticated principal.
        role: The principal's role as carried by the validated claim.
        login: The principal's login identifier, used for audit entries.
    """

    namespace: NamespaceName
    tenant_id: int | None
    principal_id: int
    role: str
    login: str | None = None

    @property
    def is_root(self) -> bool:
        return self.namespace.is_root
