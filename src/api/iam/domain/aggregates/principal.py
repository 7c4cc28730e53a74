"""Principal aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from iam.domain.value_objects import Role
from shared_kernel.validation import (
    ValidationError,
    validate_display_name,
    validate_email,
)


def _tenant_role(role: Role | str) -> Role:
    try:
        resolved = Role(role)
    except ValueError as e:
        raise ValidationError(f"Unknown role: {role}") from e
    if resolved.is_platform:
        raise ValidationError("Role must be one of Admin, Sales or Viewer")
    return resolved


@dataclass
class Principal:
    """An authenticatable user living in exactly one namespace.

    Business rules:
    - The email is the login identifier; it is unique within the
      principal's namespace only
    - Root-namespace principals are platform administrators
    - Tenant-namespace principals hold a tenant role and carry their
      tenant id
    - Principals are deactivated, never deleted
    """

    name: str
    email: str
    password_hash: str
    role: Role
    id: int | None = None
    tenant_id: int | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create_tenant_user(
        cls,
        name: str,
        email: str,
        password_hash: str,
        role: Role | str,
        tenant_id: int,
    ) -> Principal:
        """Factory for a principal inside a tenant namespace.

        Raises:
            ValidationError: If name, email or role are invalid
        """
        return cls(
            name=validate_display_name(name),
            email=validate_email(email),
            password_hash=password_hash,
            role=_tenant_role(role),
            tenant_id=tenant_id,
        )

    @classmethod
    def create_platform_admin(
        cls,
        name: str,
        email: str,
        password_hash: str,
    ) -> Principal:
        """Factory for a root-namespace platform administrator."""
        return cls(
            name=validate_display_name(name),
            email=validate_email(email),
            password_hash=password_hash,
            role=Role.SUPER_ADMIN,
        )

    @property
    def is_platform_admin(self) -> bool:
        return self.role.is_platform

    def update(
        self,
        name: str | None = None,
        email: str | None = None,
        role: Role | str | None = None,
        is_active: bool | None = None,
    ) -> None:
        """Apply validated profile changes.

        Raises:
            ValidationError: If a provided value violates its rule
        """
        if name is not None:
            self.name = validate_display_name(name)
        if email is not None:
            self.email = validate_email(email)
        if role is not None:
            self.role = _tenant_role(role)
        if is_active is not None:
            self.is_active = is_active

    def deactivate(self) -> None:
        self.is_active = False
