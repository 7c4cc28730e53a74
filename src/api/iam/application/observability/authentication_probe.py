"""Domain probe for authentication.

Login identifiers and credentials are never passed to this probe; failed
attempts are recorded only with the reason category.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthenticationProbe(Protocol):
    """Domain probe for login and token refresh."""

    def login_succeeded(
        self, principal_id: int, namespace: str, tenant_id: int | None
    ) -> None:
        """Record that a principal authenticated."""
        ...

    def login_failed(self, reason: str, namespace: str | None = None) -> None:
        """Record a rejected login attempt."""
        ...

    def token_refreshed(self, principal_id: int, namespace: str) -> None:
        """Record that a token was re-issued."""
        ...

    def with_context(self, context: ObservationContext) -> AuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthenticationProbe:
    """Default implementation of AuthenticationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthenticationProbe(logger=self._logger, context=context)

    def login_succeeded(
        self, principal_id: int, namespace: str, tenant_id: int | None
    ) -> None:
        self._logger.info(
            "login_succeeded",
            principal_id=principal_id,
            namespace=namespace,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def login_failed(self, reason: str, namespace: str | None = None) -> None:
        self._logger.warning(
            "login_failed",
            reason=reason,
            namespace=namespace,
            **self._get_context_kwargs(),
        )

    def token_refreshed(self, principal_id: int, namespace: str) -> None:
        self._logger.info(
            "token_refreshed",
            principal_id=principal_id,
            namespace=namespace,
            **self._get_context_kwargs(),
        )
