"""Repository port interfaces for IAM bounded context.

These protocols define the contracts for principal persistence.
Implementations live in the infrastructure layer.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import Principal
from iam.domain.value_objects import Role
from shared_kernel.namespaces import NamespaceName


@runtime_checkable
class IPrincipalRepository(Protocol):
    """Repository for principals of one tenant namespace.

    Implementations are bound to their namespace at construction; no
    method accepts a namespace argument.
    """

    @property
    def namespace(self) -> NamespaceName:
        """The namespace this repository reads and writes."""
        ...

    async def add(self, principal: Principal) -> Principal:
        """Insert a principal and return it with its assigned id.

        Raises:
            DuplicateEmailError: If the email is taken in this namespace
        """
        ...

    async def update(self, principal: Principal) -> Principal:
        """Persist changes to an existing principal.

        Raises:
            DuplicateEmailError: If the new email is taken in this namespace
            PrincipalNotFoundError: If the principal no longer exists
        """
        ...

    async def get_by_id(self, principal_id: int) -> Principal | None:
        """Retrieve a principal by id."""
        ...

    async def get_by_email(self, email: str) -> Principal | None:
        """Retrieve a principal by login identifier."""
        ...

    async def list(
        self,
        *,
        role: Role | None = None,
        active_only: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Principal]:
        """List principals ordered by id."""
        ...

    async def count(
        self,
        *,
        role: Role | None = None,
        active_only: bool = False,
    ) -> int:
        """Count principals matching the filters."""
        ...


@runtime_checkable
class IPlatformUserRepository(Protocol):
    """Repository for platform administrators in the root namespace."""

    async def add(self, principal: Principal) -> Principal:
        """Insert a platform administrator.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        ...

    async def get_by_id(self, principal_id: int) -> Principal | None:
        """Retrieve a platform administrator by id."""
        ...

    async def get_by_email(self, email: str) -> Principal | None:
        """Retrieve a platform administrator by email."""
        ...
