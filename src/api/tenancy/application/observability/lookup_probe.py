"""Protocol for cross-namespace login lookup observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CrossNamespaceLookupProbe(Protocol):
    """Domain probe for locating a principal across tenant namespaces."""

    def principal_located(
        self, namespace: str, principal_id: int, namespaces_scanned: int
    ) -> None:
        """Record that a login identifier was found."""
        ...

    def principal_not_located(self, namespaces_scanned: int) -> None:
        """Record that no active namespace holds the login identifier."""
        ...

    def unregistered_namespace_skipped(self, tenant_id: int, namespace: str) -> None:
        """Record that an active tenant points at a missing namespace."""
        ...

    def with_context(self, context: ObservationContext) -> CrossNamespaceLookupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCrossNamespaceLookupProbe:
    """Default implementation of CrossNamespaceLookupProbe using structlog.

    Login identifiers are never logged.
    """

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultCrossNamespaceLookupProbe:
        """Create a new probe with observation context bound."""
        return DefaultCrossNamespaceLookupProbe(logger=self._logger, context=context)

    def principal_located(
        self, namespace: str, principal_id: int, namespaces_scanned: int
    ) -> None:
        self._logger.debug(
            "principal_located",
            namespace=namespace,
            principal_id=principal_id,
            namespaces_scanned=namespaces_scanned,
            **self._get_context_kwargs(),
        )

    def principal_not_located(self, namespaces_scanned: int) -> None:
        self._logger.debug(
            "principal_not_located",
            namespaces_scanned=namespaces_scanned,
            **self._get_context_kwargs(),
        )

    def unregistered_namespace_skipped(self, tenant_id: int, namespace: str) -> None:
        self._logger.warning(
            "unregistered_namespace_skipped",
            tenant_id=tenant_id,
            namespace=namespace,
            **self._get_context_kwargs(),
        )
