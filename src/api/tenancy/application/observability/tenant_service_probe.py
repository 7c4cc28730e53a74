"""Protocol for tenant administration observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantServiceProbe(Protocol):
    """Domain probe for tenant administration and platform statistics."""

    def tenants_listed(self, count: int, total: int) -> None:
        """Record that a page of tenants was listed."""
        ...

    def tenant_retrieved(self, tenant_id: int) -> None:
        """Record that a tenant was retrieved."""
        ...

    def tenant_not_found(self, tenant_id: int) -> None:
        """Record that a tenant was not found."""
        ...

    def tenant_updated(self, tenant_id: int) -> None:
        """Record that tenant metadata changed."""
        ...

    def tenant_activated(self, tenant_id: int) -> None:
        """Record that a tenant was activated."""
        ...

    def tenant_deactivated(self, tenant_id: int) -> None:
        """Record that a tenant was deactivated."""
        ...

    def platform_stats_computed(self, namespaces: int) -> None:
        """Record that statistics were aggregated over active namespaces."""
        ...

    def with_context(self, context: ObservationContext) -> TenantServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantServiceProbe:
    """Default implementation of TenantServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTenantServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantServiceProbe(logger=self._logger, context=context)

    def tenants_listed(self, count: int, total: int) -> None:
        self._logger.debug(
            "tenants_listed", count=count, total=total, **self._get_context_kwargs()
        )

    def tenant_retrieved(self, tenant_id: int) -> None:
        self._logger.debug(
            "tenant_retrieved", tenant_id=tenant_id, **self._get_context_kwargs()
        )

    def tenant_not_found(self, tenant_id: int) -> None:
        self._logger.debug(
            "tenant_not_found", tenant_id=tenant_id, **self._get_context_kwargs()
        )

    def tenant_updated(self, tenant_id: int) -> None:
        self._logger.info(
            "tenant_updated", tenant_id=tenant_id, **self._get_context_kwargs()
        )

    def tenant_activated(self, tenant_id: int) -> None:
        self._logger.info(
            "tenant_activated", tenant_id=tenant_id, **self._get_context_kwargs()
        )

    def tenant_deactivated(self, tenant_id: int) -> None:
        self._logger.warning(
            "tenant_deactivated", tenant_id=tenant_id, **self._get_context_kwargs()
        )

    def platform_stats_computed(self, namespaces: int) -> None:
        self._logger.info(
            "platform_stats_computed",
            namespaces=namespaces,
            **self._get_context_kwargs(),
        )
