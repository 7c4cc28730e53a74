"""Unit tests for UserService."""

from unittest.mock import AsyncMock, Mock

import pytest

from audit.application.audit_trail import AuditTrail
from audit.domain.audit_entry import AuditAction
from iam.application.observability import UserServiceProbe
from iam.application.services import UserService
from iam.domain.aggregates import Principal
from iam.domain.value_objects import Role
from iam.ports.exceptions import DuplicateEmailError, PrincipalNotFoundError
from iam.ports.repositories import IPrincipalRepository
from shared_kernel.validation import ValidationError


def _stored(principal: Principal) -> Principal:
    principal.id = 12
    return principal


def _existing() -> Principal:
    return Principal(
        id=12,
        name="Ada",
        email="ada@acme.com",
        password_hash="hashed:correct-horse",
        role=Role.VIEWER,
        tenant_id=7,
    )


@pytest.fixture
def mock_principals(tenant_namespace):
    repo = Mock(spec=IPrincipalRepository)
    repo.add = AsyncMock(side_effect=_stored)
    repo.update = AsyncMock(side_effect=lambda principal: principal)
    repo.get_by_id = AsyncMock(return_value=_existing())
    repo.list = AsyncMock(return_value=[_existing()])
    repo.count = AsyncMock(return_value=21)
    return repo


@pytest.fixture
def mock_audit():
    trail = Mock(spec=AuditTrail)
    trail.record = AsyncMock()
    return trail


@pytest.fixture
def service(mock_principals, mock_audit, mock_scoped_session, fake_hasher):
    return UserService(
        principal_repository=mock_principals,
        audit_trail=mock_audit,
        session=mock_scoped_session,
        password_hasher=fake_hasher,
        tenant_id=7,
        probe=Mock(spec=UserServiceProbe),
    )


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_stores_hash_and_audits(self, service, mock_principals, mock_audit):
        principal = await service.create_user(
            name="Grace", email="Grace@Acme.com", password="long-enough", role="Sales"
        )

        assert principal.id == 12
        assert principal.tenant_id == 7
        assert principal.password_hash == "hashed:long-enough"
        mock_audit.record.assert_awaited_once()
        args, kwargs = mock_audit.record.call_args
        assert args[:3] == (AuditAction.CREATE, "user", 12)
        assert "password_hash" not in kwargs["new_values"]
        assert kwargs["new_values"]["email"] == "grace@acme.com"

    @pytest.mark.asyncio
    async def test_short_password_is_rejected_before_storage(
        self, service, mock_principals, fake_hasher
    ):
        with pytest.raises(ValidationError):
            await service.create_user(
                name="Grace", email="grace@acme.com", password="short", role="Sales"
            )
        mock_principals.add.assert_not_called()
        fake_hasher.hash.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_email_propagates(self, service, mock_principals, mock_audit):
        mock_principals.add.side_effect = DuplicateEmailError("taken")

        with pytest.raises(DuplicateEmailError):
            await service.create_user(
                name="Grace", email="ada@acme.com", password="long-enough", role="Sales"
            )
        mock_audit.record.assert_not_called()


class TestListUsers:
    @pytest.mark.asyncio
    async def test_pages_by_offset(self, service, mock_principals):
        users, total = await service.list_users(page=3, limit=10, role=Role.SALES)

        mock_principals.list.assert_awaited_once_with(
            role=Role.SALES, active_only=False, limit=10, offset=20
        )
        assert total == 21
        assert len(users) == 1


class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_records_old_and_new_values(self, service, mock_audit):
        principal = await service.update_user(12, role="Admin")

        assert principal.role is Role.ADMIN
        kwargs = mock_audit.record.call_args.kwargs
        assert kwargs["old_values"]["role"] == Role.VIEWER
        assert kwargs["new_values"]["role"] == Role.ADMIN

    @pytest.mark.asyncio
    async def test_unchanged_user_is_not_written(
        self, service, mock_principals, mock_audit
    ):
        await service.update_user(12, name="Ada")

        mock_principals.update.assert_not_called()
        mock_audit.record.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_user(self, service, mock_principals):
        mock_principals.get_by_id.return_value = None

        with pytest.raises(PrincipalNotFoundError):
            await service.update_user(99, name="Nobody")


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_deactivates_instead_of_deleting(
        self, service, mock_principals, mock_audit
    ):
        await service.delete_user(12)

        stored = mock_principals.update.call_args.args[0]
        assert stored.is_active is False
        assert mock_audit.record.call_args.args[0] is AuditAction.DELETE
