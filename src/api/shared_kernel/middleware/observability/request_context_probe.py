"""Domain probe for request context resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving the namespace a request
operates against.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RequestContextProbe(Protocol):
    """Domain probe for request context resolution operations."""

    def root_context_resolved(self, principal_id: int) -> None:
        """Record that a platform administrator was routed to the root namespace."""
        ...

    def tenant_context_resolved(
        self,
        tenant_id: int,
        namespace: str,
        principal_id: int,
    ) -> None:
        """Record that a request was routed to an active tenant namespace."""
        ...

    def malformed_context(self, principal_id: int, reason: str) -> None:
        """Record that a claim could not be turned into a namespace."""
        ...

    def tenant_not_found(self, tenant_id: int, principal_id: int) -> None:
        """Record that the claimed tenant does not exist."""
        ...

    def tenant_suspended(self, tenant_id: int, principal_id: int) -> None:
        """Record that the claimed tenant is deactivated."""
        ...

    def with_context(self, context: ObservationContext) -> RequestContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRequestContextProbe:
    """Default implementation of RequestContextProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRequestContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultRequestContextProbe(logger=self._logger, context=context)

    def root_context_resolved(self, principal_id: int) -> None:
        """Record that a platform administrator was routed to the root namespace."""
        self._logger.debug(
            "request_context_resolved_to_root",
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def tenant_context_resolved(
        self,
        tenant_id: int,
        namespace: str,
        principal_id: int,
    ) -> None:
        """Record that a request was routed to an active tenant namespace."""
        self._logger.debug(
            "request_context_resolved_to_tenant",
            tenant_id=tenant_id,
            namespace=namespace,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def malformed_context(self, principal_id: int, reason: str) -> None:
        """Record that a claim could not be turned into a namespace."""
        self._logger.warning(
            "request_context_malformed",
            principal_id=principal_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, tenant_id: int, principal_id: int) -> None:
        """Record that the claimed tenant does not exist."""
        self._logger.warning(
            "request_context_tenant_not_found",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def tenant_suspended(self, tenant_id: int, principal_id: int) -> None:
        """Record that the claimed tenant is deactivated."""
        self._logger.warning(
            "request_context_tenant_suspended",
            tenant_id=tenant_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )
