"""Domain probe for principal repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of principal persistence in both tenant
namespaces and the root namespace.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PrincipalRepositoryProbe(Protocol):
    """Domain probe for principal repository operations."""

    def principal_saved(self, principal_id: int, namespace: str) -> None:
        """Record that a principal was inserted or updated."""
        ...

    def principal_retrieved(self, principal_id: int, namespace: str) -> None:
        """Record that a principal was retrieved."""
        ...

    def duplicate_email(self, namespace: str) -> None:
        """Record that an email collided within a namespace."""
        ...

    def with_context(self, context: ObservationContext) -> PrincipalRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPrincipalRepositoryProbe:
    """Default implementation of PrincipalRepositoryProbe using structlog."""

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
    ) -> DefaultPrincipalRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultPrincipalRepositoryProbe(logger=self._logger, context=context)

    def principal_saved(self, principal_id: int, namespace: str) -> None:
        self._logger.debug(
            "principal_saved",
            principal_id=principal_id,
            namespace=namespace,
            **self._get_context_kwargs(),
        )

    def principal_retrieved(self, principal_id: int, namespace: str) -> None:
        self._logger.debug(
            "principal_retrieved",
            principal_id=principal_id,
            namespace=namespace,
            **self._get_context_kwargs(),
        )

    def duplicate_email(self, namespace: str) -> None:
        # The email itself is not logged.
        self._logger.warning(
            "duplicate_principal_email",
            namespace=namespace,
            **self._get_context_kwargs(),
        )
