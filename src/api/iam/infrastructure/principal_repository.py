"""Namespace-scoped implementation of IPrincipalRepository.

Reads and writes the ``users`` table of exactly one tenant namespace,
fixed by the ``ScopedSession`` the repository is built with.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError

from iam.domain.aggregates import Principal
from iam.domain.value_objects import Role
from iam.infrastructure.models import users_table
from iam.infrastructure.observability import (
    DefaultPrincipalRepositoryProbe,
    PrincipalRepositoryProbe,
)
from iam.ports.exceptions import DuplicateEmailError, PrincipalNotFoundError
from iam.ports.repositories import IPrincipalRepository
from infrastructure.database.scoping import ScopedSession
from shared_kernel.namespaces import NamespaceName


class PrincipalRepository(IPrincipalRepository):
    """Repository for the principals of one tenant namespace."""

    def __init__(
        self,
        session: ScopedSession,
        probe: PrincipalRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a namespace-bound session.

        Args:
            session: ScopedSession naming the tenant namespace
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultPrincipalRepositoryProbe()

    @property
    def namespace(self) -> NamespaceName:
        return self._session.namespace

    async def add(self, principal: Principal) -> Principal:
        if await self.get_by_email(principal.email) is not None:
            self._duplicate()

        stmt = (
            insert(users_table)
            .values(**self._values(principal))
            .returning(users_table)
        )
        try:
            result = await self._session.execute(stmt)
        except IntegrityError as e:
            if "uq_users_email" in str(e):
                self._duplicate(e)
            raise

        row = result.mappings().one()
        principal.id = row["id"]
        principal.created_at = row["created_at"]
        principal.updated_at = row["updated_at"]
        self._probe.principal_saved(principal.id, self.namespace.value)
        return principal

    async def update(self, principal: Principal) -> Principal:
        if principal.id is None:
            raise PrincipalNotFoundError("Principal has not been stored")

        existing = await self.get_by_email(principal.email)
        if existing is not None and existing.id != principal.id:
            self._duplicate()

        stmt = (
            update(users_table)
            .where(users_table.c.id == principal.id)
            .values(**self._values(principal))
            .returning(users_table.c.updated_at)
        )
        try:
            result = await self._session.execute(stmt)
        except IntegrityError as e:
            if "uq_users_email" in str(e):
                self._duplicate(e)
            raise

        updated_at = result.scalar_one_or_none()
        if updated_at is None:
            raise PrincipalNotFoundError(f"Principal {principal.id} not found")
        principal.updated_at = updated_at
        self._probe.principal_saved(principal.id, self.namespace.value)
        return principal

    async def get_by_id(self, principal_id: int) -> Principal | None:
        stmt = select(users_table).where(users_table.c.id == principal_id)
        return await self._fetch_one(stmt)

    async def get_by_email(self, email: str) -> Principal | None:
        stmt = select(users_table).where(
            users_table.c.email == email.strip().lower()
        )
        return await self._fetch_one(stmt)

    async def list(
        self,
        *,
        role: Role | None = None,
        active_only: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Principal]:
        stmt = self._filtered(select(users_table), role, active_only)
        stmt = stmt.order_by(users_table.c.id.asc()).limit(limit).offset(offset)
        result = await self._session.execute(stmt)
        return [self._to_domain(row) for row in result.mappings().all()]

    async def count(
        self,
        *,
        role: Role | None = None,
        active_only: bool = False,
    ) -> int:
        stmt = self._filtered(
            select(func.count()).select_from(users_table), role, active_only
        )
        return int(await self._session.scalar(stmt) or 0)

    @staticmethod
    def _filtered(stmt: Any, role: Role | None, active_only: bool) -> Any:
        if role is not None:
            stmt = stmt.where(users_table.c.role == role.value)
        if active_only:
            stmt = stmt.where(users_table.c.is_active.is_(True))
        return stmt

    async def _fetch_one(self, stmt: Any) -> Principal | None:
        result = await self._session.execute(stmt)
        row = result.mappings().one_or_none()
        if row is None:
            return None
        self._probe.principal_retrieved(row["id"], self.namespace.value)
        return self._to_domain(row)

    def _duplicate(self, cause: Exception | None = None) -> None:
        self._probe.duplicate_email(self.namespace.value)
        raise DuplicateEmailError("Email already exists") from cause

    @staticmethod
    def _values(principal: Principal) -> dict[str, Any]:
        return {
            "tenant_id": principal.tenant_id,
            "name": principal.name,
            "email": principal.email,
            "password_hash": principal.password_hash,
            "role": principal.role.value,
            "is_active": principal.is_active,
        }

    @staticmethod
    def _to_domain(row: RowMapping) -> Principal:
        return Principal(
            id=row["id"],
            tenant_id=row["tenant_id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            role=Role(row["role"]),
            is_active=row["is_active"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
