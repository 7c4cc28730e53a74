"""Domain-Oriented Observability for the audit application layer."""

from audit.application.observability.audit_probe import (
    AuditProbe,
    DefaultAuditProbe,
)

__all__ = ["AuditProbe", "DefaultAuditProbe"]
