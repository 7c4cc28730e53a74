"""Domain probe for tenant user management."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user service operations."""

    def user_created(self, namespace: str, user_id: int, role: str) -> None:
        ...

    def user_updated(self, namespace: str, user_id: int) -> None:
        ...

    def user_deactivated(self, namespace: str, user_id: int) -> None:
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_created(self, namespace: str, user_id: int, role: str) -> None:
        self._logger.info(
            "user_created",
            namespace=namespace,
            user_id=user_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def user_updated(self, namespace: str, user_id: int) -> None:
        self._logger.info(
            "user_updated",
            namespace=namespace,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_deactivated(self, namespace: str, user_id: int) -> None:
        self._logger.info(
            "user_deactivated",
            namespace=namespace,
            user_id=user_id,
            **self._get_context_kwargs(),
        )
