"""Database-specific exceptions shared by all bounded contexts."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class InvalidNamespaceError(DatabaseError, ValueError):
    """Raised when a scoped session is requested for an unusable namespace.

    Tenant data structures only exist inside tenant namespaces, so a
    scoped session bound to the root namespace is always a programming
    error.
    """

    pass
