"""Request-scoped namespace resolution.

Turns validated token claims into the ``RequestContext`` every data
access of a request is bound to. The namespace in a claim is only a hint:
the owning tenant record is re-read on every request, so deactivation
takes effect immediately even for unexpired tokens.
"""

from __future__ import annotations

from typing import NoReturn

from iam.domain.value_objects import Role
from shared_kernel.auth import TokenClaims
from shared_kernel.middleware import RequestContext
from shared_kernel.middleware.observability import (
    DefaultRequestContextProbe,
    RequestContextProbe,
)
from shared_kernel.namespaces import NamespaceName
from tenancy.domain.exceptions import (
    MalformedContextError,
    TenantNotFoundError,
    TenantSuspendedError,
)
from tenancy.domain.value_objects import TenantId
from tenancy.ports.repositories import ITenantRepository


class NamespaceResolver:
    """Resolves the namespace a request operates against."""

    def __init__(
        self,
        tenant_repository: ITenantRepository,
        probe: RequestContextProbe | None = None,
    ):
        """Initialize the resolver.

        Args:
            tenant_repository: Tenant record store consulted on every request
            probe: Optional domain probe for observability
        """
        self._tenant_repository = tenant_repository
        self._probe = probe or DefaultRequestContextProbe()

    async def resolve(self, claims: TokenClaims) -> RequestContext:
        """Resolve claims into a request context.

        Raises:
            MalformedContextError: If the claims do not name a usable namespace
            TenantNotFoundError: If the claimed tenant does not exist
            TenantSuspendedError: If the claimed tenant is deactivated
        """
        try:
            role = Role(claims.role)
        except ValueError:
            return self._malformed(claims, "unknown role")

        if role.is_platform:
            if claims.tenant_id is not None or claims.namespace is not None:
                return self._malformed(claims, "platform claim carries tenant")
            self._probe.root_context_resolved(claims.principal_id)
            return RequestContext(
                namespace=NamespaceName.root(),
                tenant_id=None,
                principal_id=claims.principal_id,
                role=role.value,
                login=claims.email,
            )

        if claims.tenant_id is None or claims.namespace is None:
            return self._malformed(claims, "tenant claim incomplete")

        try:
            tenant_id = TenantId(value=claims.tenant_id)
            namespace = NamespaceName.from_string(claims.namespace)
        except ValueError:
            return self._malformed(claims, "invalid tenant or namespace")

        if namespace.is_root:
            return self._malformed(claims, "tenant claim names root namespace")

        tenant = await self._tenant_repository.get_by_id(tenant_id)
        if tenant is None:
            self._probe.tenant_not_found(tenant_id.value, claims.principal_id)
            raise TenantNotFoundError(f"Tenant {tenant_id} not found")

        if not tenant.is_active:
            self._probe.tenant_suspended(tenant_id.value, claims.principal_id)
            raise TenantSuspendedError(f"Tenant {tenant_id} is suspended")

        if tenant.namespace != namespace:
            return self._malformed(claims, "namespace does not belong to tenant")

        self._probe.tenant_context_resolved(
            tenant_id.value, namespace.value, claims.principal_id
        )
        return RequestContext(
            namespace=namespace,
            tenant_id=tenant_id.value,
            principal_id=claims.principal_id,
            role=role.value,
            login=claims.email,
        )

    def _malformed(self, claims: TokenClaims, reason: str) -> NoReturn:
        self._probe.malformed_context(claims.principal_id, reason)
        raise MalformedContextError(reason)
