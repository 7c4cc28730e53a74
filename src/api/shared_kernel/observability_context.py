"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped and domain-relevant metadata that should be
    included with all instrumentation events. This enables correlation
    of events across requests and provides business context for debugging.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        principal_id: Identifier of the principal performing the operation.
        tenant_id: Tenant identifier (None for platform operations).
        namespace: Namespace the operation runs against (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(
            request_id="req-123",
            tenant_id="7",
            namespace="namespace_7",
        )
        probe = DefaultUnitServiceProbe().with_context(context)
    """

    request_id: str | None = None
    principal_id: str | None = None
    tenant_id: str | None = None
    namespace: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.principal_id is not None:
            result["principal_id"] = self.principal_id
        if self.tenant_id is not None:
            result["tenant_id"] = self.tenant_id
        if self.namespace is not None:
            result["namespace"] = self.namespace
        result.update(self.extra)
        return result

    def with_namespace(self, namespace: str) -> ObservationContext:
        """Create a new context with the namespace set."""
        return ObservationContext(
            request_id=self.request_id,
            principal_id=self.principal_id,
            tenant_id=self.tenant_id,
            namespace=namespace,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        new_extra = {**self.extra, **kwargs}
        return ObservationContext(
            request_id=self.request_id,
            principal_id=self.principal_id,
            tenant_id=self.tenant_id,
            namespace=self.namespace,
            extra=new_extra,
        )
