"""PostgreSQL implementation of IPlatformUserRepository.

Platform administrators live in the root namespace and are the only
principals that never belong to a tenant.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import Principal
from iam.domain.value_objects import Role
from iam.infrastructure.models import PlatformUserModel
from iam.infrastructure.observability import (
    DefaultPrincipalRepositoryProbe,
    PrincipalRepositoryProbe,
)
from iam.ports.exceptions import DuplicateEmailError
from iam.ports.repositories import IPlatformUserRepository
from shared_kernel.namespaces import ROOT_NAMESPACE


class PlatformUserRepository(IPlatformUserRepository):
    """Repository for platform administrators."""

    def __init__(
        self,
        session: AsyncSession,
        probe: PrincipalRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultPrincipalRepositoryProbe()

    async def add(self, principal: Principal) -> Principal:
        """Insert a platform administrator.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        if await self.get_by_email(principal.email) is not None:
            self._probe.duplicate_email(ROOT_NAMESPACE)
            raise DuplicateEmailError("Email already exists")

        model = PlatformUserModel(
            name=principal.name,
            email=principal.email,
            password_hash=principal.password_hash,
            role=principal.role.value,
            is_active=principal.is_active,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            self._probe.duplicate_email(ROOT_NAMESPACE)
            raise DuplicateEmailError("Email already exists") from e

        principal.id = model.id
        principal.created_at = model.created_at
        principal.updated_at = model.updated_at
        self._probe.principal_saved(model.id, ROOT_NAMESPACE)
        return principal

    async def get_by_id(self, principal_id: int) -> Principal | None:
        stmt = select(PlatformUserModel).where(PlatformUserModel.id == principal_id)
        return await self._fetch_one(stmt)

    async def get_by_email(self, email: str) -> Principal | None:
        stmt = select(PlatformUserModel).where(
            PlatformUserModel.email == email.strip().lower()
        )
        return await self._fetch_one(stmt)

    async def _fetch_one(self, stmt) -> Principal | None:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            return None

        self._probe.principal_retrieved(model.id, ROOT_NAMESPACE)
        return Principal(
            id=model.id,
            name=model.name,
            email=model.email,
            password_hash=model.password_hash,
            role=Role(model.role),
            is_active=model.is_active,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
