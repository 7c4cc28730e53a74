"""Domain probe for project and unit services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class InventoryServiceProbe(Protocol):
    """Domain probe for inventory operations inside a tenant namespace."""

    def project_saved(self, namespace: str, project_id: int) -> None:
        ...

    def project_deleted(self, namespace: str, project_id: int) -> None:
        ...

    def unit_saved(self, namespace: str, unit_id: int) -> None:
        ...

    def unit_deleted(self, namespace: str, unit_id: int) -> None:
        ...

    def unit_booked(self, namespace: str, unit_id: int, principal_id: int) -> None:
        ...

    def booking_rejected(self, namespace: str, unit_id: int, status: str) -> None:
        """Record that a unit could not be booked in its current state."""
        ...

    def unit_sold(self, namespace: str, unit_id: int) -> None:
        ...

    def with_context(self, context: ObservationContext) -> InventoryServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultInventoryServiceProbe:
    """Default implementation of InventoryServiceProbe using structlog."""

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
    ) -> DefaultInventoryServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultInventoryServiceProbe(logger=self._logger, context=context)

    def project_saved(self, namespace: str, project_id: int) -> None:
        self._logger.info(
            "project_saved",
            namespace=namespace,
            project_id=project_id,
            **self._get_context_kwargs(),
        )

    def project_deleted(self, namespace: str, project_id: int) -> None:
        self._logger.info(
            "project_deleted",
            namespace=namespace,
            project_id=project_id,
            **self._get_context_kwargs(),
        )

    def unit_saved(self, namespace: str, unit_id: int) -> None:
        self._logger.info(
            "unit_saved",
            namespace=namespace,
            unit_id=unit_id,
            **self._get_context_kwargs(),
        )

    def unit_deleted(self, namespace: str, unit_id: int) -> None:
        self._logger.info(
            "unit_deleted",
            namespace=namespace,
            unit_id=unit_id,
            **self._get_context_kwargs(),
        )

    def unit_booked(self, namespace: str, unit_id: int, principal_id: int) -> None:
        self._logger.info(
            "unit_booked",
            namespace=namespace,
            unit_id=unit_id,
            principal_id=principal_id,
            **self._get_context_kwargs(),
        )

    def booking_rejected(self, namespace: str, unit_id: int, status: str) -> None:
        self._logger.info(
            "unit_booking_rejected",
            namespace=namespace,
            unit_id=unit_id,
            status=status,
            **self._get_context_kwargs(),
        )

    def unit_sold(self, namespace: str, unit_id: int) -> None:
        self._logger.info(
            "unit_sold",
            namespace=namespace,
            unit_id=unit_id,
            **self._get_context_kwargs(),
        )
