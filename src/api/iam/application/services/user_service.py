"""User management inside a tenant namespace."""

from __future__ import annotations

from audit.application.audit_trail import AuditTrail
from audit.domain.audit_entry import AuditAction
from iam.application.observability import DefaultUserServiceProbe, UserServiceProbe
from iam.domain.aggregates import Principal
from iam.domain.value_objects import Role
from iam.ports.exceptions import PrincipalNotFoundError
from iam.ports.repositories import IPrincipalRepository
from infrastructure.database.scoping import ScopedSession
from shared_kernel.auth import PasswordHasher
from shared_kernel.validation import validate_password

AUDIT_ENTITY = "user"


def _audit_view(principal: Principal) -> dict:
    return {
        "id": principal.id,
        "name": principal.name,
        "email": principal.email,
        "role": principal.role,
        "is_active": principal.is_active,
    }


class UserService:
    """Application service for the principals of one tenant namespace."""

    def __init__(
        self,
        principal_repository: IPrincipalRepository,
        audit_trail: AuditTrail,
        session: ScopedSession,
        password_hasher: PasswordHasher,
        tenant_id: int,
        probe: UserServiceProbe | None = None,
    ):
        self._principals = principal_repository
        self._audit = audit_trail
        self._session = session
        self._password_hasher = password_hasher
        self._tenant_id = tenant_id
        self._probe = probe or DefaultUserServiceProbe()

    @property
    def _namespace(self) -> str:
        return self._session.namespace.value

    async def create_user(
        self, name: str, email: str, password: str, role: Role | str
    ) -> Principal:
        """Create a user in the namespace.

        Raises:
            ValidationError: If any field is invalid
            DuplicateEmailError: If the email is taken in this namespace
        """
        validate_password(password)
        principal = Principal.create_tenant_user(
            name=name,
            email=email,
            password_hash=self._password_hasher.hash(password),
            role=role,
            tenant_id=self._tenant_id,
        )
        async with self._session.begin():
            principal = await self._principals.add(principal)
            await self._audit.record(
                AuditAction.CREATE,
                AUDIT_ENTITY,
                principal.id,
                new_values=_audit_view(principal),
            )
        self._probe.user_created(self._namespace, principal.id, principal.role.value)
        return principal

    async def list_users(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        role: Role | None = None,
        active_only: bool = False,
    ) -> tuple[list[Principal], int]:
        users = await self._principals.list(
            role=role,
            active_only=active_only,
            limit=limit,
            offset=(page - 1) * limit,
        )
        total = await self._principals.count(role=role, active_only=active_only)
        return users, total

    async def get_user(self, user_id: int) -> Principal:
        """Retrieve a user.

        Raises:
            PrincipalNotFoundError: If the user is not in this namespace
        """
        principal = await self._principals.get_by_id(user_id)
        if principal is None:
            raise PrincipalNotFoundError(f"User {user_id} not found")
        return principal

    async def update_user(
        self,
        user_id: int,
        name: str | None = None,
        email: str | None = None,
        role: Role | str | None = None,
        is_active: bool | None = None,
    ) -> Principal:
        """Update a user's profile.

        Raises:
            PrincipalNotFoundError: If the user is not in this namespace
            ValidationError: If a value is invalid
            DuplicateEmailError: If the new email is taken in this namespace
        """
        async with self._session.begin():
            principal = await self.get_user(user_id)
            before = _audit_view(principal)
            principal.update(name=name, email=email, role=role, is_active=is_active)
            after = _audit_view(principal)
            if before == after:
                return principal

            principal = await self._principals.update(principal)
            await self._audit.record(
                AuditAction.UPDATE,
                AUDIT_ENTITY,
                principal.id,
                old_values=before,
                new_values=after,
            )
        self._probe.user_updated(self._namespace, principal.id)
        return principal

    async def delete_user(self, user_id: int) -> None:
        """Deactivate a user. Principals are never physically deleted.

        Raises:
            PrincipalNotFoundError: If the user is not in this namespace
        """
        async with self._session.begin():
            principal = await self.get_user(user_id)
            before = _audit_view(principal)
            principal.deactivate()
            await self._principals.update(principal)
            await self._audit.record(
                AuditAction.DELETE, AUDIT_ENTITY, principal.id, old_values=before
            )
        self._probe.user_deactivated(self._namespace, user_id)
