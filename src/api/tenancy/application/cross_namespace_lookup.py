"""Locate a principal when the caller's namespace is not yet known.

Only used at login. Every steady-state request carries its namespace in
the token and goes through ``NamespaceResolver`` instead.
"""

from __future__ import annotations

from typing import Callable

from iam.ports.repositories import IPrincipalRepository
from shared_kernel.namespaces import NamespaceName
from tenancy.application.observability import (
    CrossNamespaceLookupProbe,
    DefaultCrossNamespaceLookupProbe,
)
from tenancy.application.value_objects import ActiveNamespace, PrincipalLocation
from tenancy.ports.repositories import INamespaceRegistry, ITenantRepository

PrincipalRepositoryFactory = Callable[[NamespaceName], IPrincipalRepository]


class CrossNamespaceLookup:
    """Scans the namespaces of active tenants for a login identifier.

    Namespaces are visited in ascending tenant id order and the scan stops
    at the first match. Should two active namespaces share an identifier,
    the lower tenant id wins.
    """

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        namespace_registry: INamespaceRegistry,
        principal_repository_factory: PrincipalRepositoryFactory,
        probe: CrossNamespaceLookupProbe | None = None,
    ):
        self._tenant_repository = tenant_repository
        self._registry = namespace_registry
        self._principal_repository_factory = principal_repository_factory
        self._probe = probe or DefaultCrossNamespaceLookupProbe()

    async def active_namespaces(self) -> list[ActiveNamespace]:
        """Registered namespaces of active tenants, by ascending tenant id.

        Deactivated tenants are excluded here rather than in the registry,
        which knows nothing about tenant activity.
        """
        tenants = await self._tenant_repository.list_all(active_only=True)
        registered = await self._registry.list_all()

        namespaces: list[ActiveNamespace] = []
        for tenant in tenants:
            if tenant.namespace is None:
                continue
            if tenant.namespace not in registered:
                self._probe.unregistered_namespace_skipped(
                    tenant.id.value, tenant.namespace.value
                )
                continue
            namespaces.append(
                ActiveNamespace(tenant_id=tenant.id.value, namespace=tenant.namespace)
            )
        return namespaces

    async def find_by_login(self, email: str) -> PrincipalLocation | None:
        """Find the principal owning a login identifier.

        Returns:
            The first match, or None when no active namespace holds it
        """
        login = email.strip().lower()
        scanned = 0
        for active in await self.active_namespaces():
            scanned += 1
            principals = self._principal_repository_factory(active.namespace)
            principal = await principals.get_by_email(login)
            if principal is not None:
                self._probe.principal_located(
                    active.namespace.value, principal.id, scanned
                )
                return PrincipalLocation(
                    principal=principal,
                    namespace=active.namespace,
                    tenant_id=active.tenant_id,
                )

        self._probe.principal_not_located(scanned)
        return None
