"""Domain probe for audit trail writes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuditProbe(Protocol):
    """Domain probe for recording audit entries."""

    def entry_recorded(self, namespace: str, action: str, entity: str) -> None:
        """Record that an audit entry was written."""
        ...

    def entry_failed(
        self, namespace: str, action: str, entity: str, error: Exception
    ) -> None:
        """Record that writing an audit entry failed and was skipped."""
        ...

    def with_context(self, context: ObservationContext) -> AuditProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuditProbe:
    """Default implementation of AuditProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuditProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuditProbe(logger=self._logger, context=context)

    def entry_recorded(self, namespace: str, action: str, entity: str) -> None:
        self._logger.debug(
            "audit_entry_recorded",
            namespace=namespace,
            action=action,
            entity=entity,
            **self._get_context_kwargs(),
        )

    def entry_failed(
        self, namespace: str, action: str, entity: str, error: Exception
    ) -> None:
        self._logger.error(
            "audit_entry_failed",
            namespace=namespace,
            action=action,
            entity=entity,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
