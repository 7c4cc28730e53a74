"""Domain probe for access token validation.

Every authenticated request passes through the validator, so a rejected
token is the first signal of a misconfigured client or a forged credential.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class JWTValidatorProbe(Protocol):
    """Domain probe for access token validation."""

    def access_token_accepted(
        self, principal_id: str, role: str, namespace: str | None
    ) -> None:
        """Record that a token passed signature and claim checks."""
        ...

    def access_token_rejected(self, reason: str) -> None:
        """Record that a token was refused."""
        ...

    def with_context(self, context: ObservationContext) -> JWTValidatorProbe:
        ...


class DefaultJWTValidatorProbe:
    """structlog-backed JWTValidatorProbe."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _context_fields(self) -> dict[str, Any]:
        return {} if self._context is None else self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultJWTValidatorProbe:
        return DefaultJWTValidatorProbe(logger=self._logger, context=context)

    def access_token_accepted(
        self, principal_id: str, role: str, namespace: str | None
    ) -> None:
        self._logger.debug(
            "access_token_accepted",
            principal_id=principal_id,
            role=role,
            namespace=namespace or "platform",
            **self._context_fields(),
        )

    def access_token_rejected(self, reason: str) -> None:
        self._logger.warning(
            "access_token_rejected",
            reason=reason,
            **self._context_fields(),
        )
