"""Domain exceptions for the audit bounded context."""


class AuditEntryNotFoundError(Exception):
    """Raised when an audit entry does not exist in the active namespace."""

    pass
