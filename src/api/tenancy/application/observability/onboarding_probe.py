"""Protocol for tenant onboarding observability.

Onboarding is the only multi-step write in the tenancy context, so its
probe records every terminal outcome, including advisory cleanup.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OnboardingProbe(Protocol):
    """Domain probe for tenant onboarding."""

    def onboarding_started(self, name: str) -> None:
        """Record that an onboarding attempt passed validation."""
        ...

    def tenant_onboarded(
        self, tenant_id: int, namespace: str, steps_applied: int
    ) -> None:
        """Record that a tenant was onboarded and activated."""
        ...

    def namespace_collision(self, tenant_id: int, namespace: str) -> None:
        """Record that a derived namespace name was already registered."""
        ...

    def onboarding_failed(
        self, name: str, namespace: str | None, error: Exception
    ) -> None:
        """Record that onboarding was rolled back."""
        ...

    def namespace_cleanup_failed(self, namespace: str, error: Exception) -> None:
        """Record that dropping a namespace after a failure did not succeed."""
        ...

    def with_context(self, context: ObservationContext) -> OnboardingProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultOnboardingProbe:
    """Default implementation of OnboardingProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultOnboardingProbe:
        """Create a new probe with observation context bound."""
        return DefaultOnboardingProbe(logger=self._logger, context=context)

    def onboarding_started(self, name: str) -> None:
        self._logger.info(
            "tenant_onboarding_started",
            name=name,
            **self._get_context_kwargs(),
        )

    def tenant_onboarded(
        self, tenant_id: int, namespace: str, steps_applied: int
    ) -> None:
        self._logger.info(
            "tenant_onboarded",
            tenant_id=tenant_id,
            namespace=namespace,
            steps_applied=steps_applied,
            **self._get_context_kwargs(),
        )

    def namespace_collision(self, tenant_id: int, namespace: str) -> None:
        self._logger.error(
            "namespace_collision",
            tenant_id=tenant_id,
            namespace=namespace,
            **self._get_context_kwargs(),
        )

    def onboarding_failed(
        self, name: str, namespace: str | None, error: Exception
    ) -> None:
        self._logger.error(
            "tenant_onboarding_failed",
            name=name,
            namespace=namespace,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def namespace_cleanup_failed(self, namespace: str, error: Exception) -> None:
        self._logger.warning(
            "namespace_cleanup_failed",
            namespace=namespace,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
