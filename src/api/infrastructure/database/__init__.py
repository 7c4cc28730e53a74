"""Database infrastructure - shared connection primitives."""

from infrastructure.database.exceptions import DatabaseError, InvalidNamespaceError
from infrastructure.database.scoping import ScopedSession

__all__ = [
    "DatabaseError",
    "InvalidNamespaceError",
    "ScopedSession",
]
