"""Domain probe for tenant record persistence."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantRepositoryProbe(Protocol):
    """Domain probe for tenant repository operations."""

    def tenant_inserted(self, tenant_id: int) -> None:
        """Record that a tenant record was inserted."""
        ...

    def tenant_saved(self, tenant_id: int) -> None:
        """Record that a tenant record was updated."""
        ...

    def tenant_retrieved(self, tenant_id: int) -> None:
        """Record that a tenant record was retrieved."""
        ...

    def tenants_listed(self, count: int, active_only: bool) -> None:
        """Record that tenant records were listed."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantRepositoryProbe:
    """Default implementation of TenantRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRepositoryProbe(logger=self._logger, context=context)

    def tenant_inserted(self, tenant_id: int) -> None:
        """Record that a tenant record was inserted."""
        self._logger.debug(
            "tenant_record_inserted",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_saved(self, tenant_id: int) -> None:
        """Record that a tenant record was updated."""
        self._logger.debug(
            "tenant_record_saved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenant_retrieved(self, tenant_id: int) -> None:
        """Record that a tenant record was retrieved."""
        self._logger.debug(
            "tenant_record_retrieved",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def tenants_listed(self, count: int, active_only: bool) -> None:
        """Record that tenant records were listed."""
        self._logger.debug(
            "tenant_records_listed",
            count=count,
            active_only=active_only,
            **self._get_context_kwargs(),
        )
