"""Domain probe for namespace registration and provisioning."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class NamespaceProbe(Protocol):
    """Domain probe for namespace registry and provisioner operations."""

    def namespace_registered(self, namespace: str) -> None:
        """Record that a namespace container was ensured."""
        ...

    def namespace_registration_failed(self, namespace: str, error: Exception) -> None:
        """Record that the storage layer refused to create a namespace."""
        ...

    def namespace_dropped(self, namespace: str) -> None:
        """Record that a namespace was dropped."""
        ...

    def structural_step_applied(self, namespace: str, step: str) -> None:
        """Record that a structural step was applied to a namespace."""
        ...

    def structural_step_skipped(self, namespace: str, step: str) -> None:
        """Record that an already-applied structural step was skipped."""
        ...

    def provisioning_failed(self, namespace: str, step: str, error: Exception) -> None:
        """Record that a structural step failed."""
        ...

    def namespace_provisioned(self, namespace: str, applied: int) -> None:
        """Record that a namespace is structurally complete."""
        ...

    def with_context(self, context: ObservationContext) -> NamespaceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultNamespaceProbe:
    """Default implementation of NamespaceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultNamespaceProbe:
        """Create a new probe with observation context bound."""
        return DefaultNamespaceProbe(logger=self._logger, context=context)

    def namespace_registered(self, namespace: str) -> None:
        """Record that a namespace container was ensured."""
        self._logger.info(
            "namespace_registered",
            namespace=namespace,
            **self._get_context_kwargs(),
        )

    def namespace_registration_failed(self, namespace: str, error: Exception) -> None:
        """Record that the storage layer refused to create a namespace."""
        self._logger.error(
            "namespace_registration_failed",
            namespace=namespace,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def namespace_dropped(self, namespace: str) -> None:
        """Record that a namespace was dropped."""
        self._logger.warning(
            "namespace_dropped",
            namespace=namespace,
            **self._get_context_kwargs(),
        )

    def structural_step_applied(self, namespace: str, step: str) -> None:
        """Record that a structural step was applied to a namespace."""
        self._logger.info(
            "structural_step_applied",
            namespace=namespace,
            step=step,
            **self._get_context_kwargs(),
        )

    def structural_step_skipped(self, namespace: str, step: str) -> None:
        """Record that an already-applied structural step was skipped."""
        self._logger.debug(
            "structural_step_skipped",
            namespace=namespace,
            step=step,
            **self._get_context_kwargs(),
        )

    def provisioning_failed(self, namespace: str, step: str, error: Exception) -> None:
        """Record that a structural step failed."""
        self._logger.error(
            "namespace_provisioning_failed",
            namespace=namespace,
            step=step,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def namespace_provisioned(self, namespace: str, applied: int) -> None:
        """Record that a namespace is structurally complete."""
        self._logger.info(
            "namespace_provisioned",
            namespace=namespace,
            steps_applied=applied,
            **self._get_context_kwargs(),
        )
