"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for roles and permissions.
"""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Roles a principal can hold.

    ``SUPER_ADMIN`` only exists in the root namespace; every other role
    only exists inside a tenant namespace.
    """

    SUPER_ADMIN = "Super Admin"
    ADMIN = "Admin"
    SALES = "Sales"
    VIEWER = "Viewer"

    @property
    def is_platform(self) -> bool:
        """True for the platform-administrator role."""
        return self is Role.SUPER_ADMIN

    @classmethod
    def tenant_roles(cls) -> tuple[Role, ...]:
        """Roles assignable to principals inside a tenant namespace."""
        return (cls.ADMIN, cls.SALES, cls.VIEWER)


class Resource(StrEnum):
    """Things a role may act upon."""

    TENANTS = "tenants"
    STATS = "stats"
    USERS = "users"
    PROJECTS = "projects"
    UNITS = "units"
    AUDIT_LOGS = "audit_logs"


class Action(StrEnum):
    """Operations a role may perform on a resource."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    BOOK = "book"
    SELL = "sell"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"


_CRUD = frozenset({Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE})

# Platform administrators manage tenants only; they hold nothing inside
# tenant namespaces.
ROLE_PERMISSIONS: dict[Role, dict[Resource, frozenset[Action]]] = {
    Role.SUPER_ADMIN: {
        Resource.TENANTS: frozenset(
            {
                Action.CREATE,
                Action.READ,
                Action.UPDATE,
                Action.ACTIVATE,
                Action.DEACTIVATE,
            }
        ),
        Resource.STATS: frozenset({Action.READ}),
    },
    Role.ADMIN: {
        Resource.USERS: _CRUD,
        Resource.PROJECTS: _CRUD,
        Resource.UNITS: _CRUD | {Action.BOOK, Action.SELL},
        Resource.AUDIT_LOGS: frozenset({Action.READ}),
    },
    Role.SALES: {
        Resource.PROJECTS: frozenset({Action.READ}),
        Resource.UNITS: frozenset({Action.READ, Action.BOOK}),
        Resource.AUDIT_LOGS: frozenset({Action.READ}),
    },
    Role.VIEWER: {
        Resource.PROJECTS: frozenset({Action.READ}),
        Resource.UNITS: frozenset({Action.READ}),
        Resource.AUDIT_LOGS: frozenset({Action.READ}),
    },
}


def has_permission(role: Role | str, resource: Resource, action: Action) -> bool:
    """Check the permission matrix. Unknown roles have no permissions."""
    try:
        resolved = Role(role)
    except ValueError:
        return False
    return action in ROLE_PERMISSIONS.get(resolved, {}).get(resource, frozenset())
