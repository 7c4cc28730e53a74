"""Unit tests for NamespaceProvisioner and the structural step list."""

from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from sqlalchemy import Insert, Select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from shared_kernel.namespaces import NamespaceName
from tenancy.infrastructure.namespace_provisioner import NamespaceProvisioner
from tenancy.infrastructure.observability import NamespaceProbe
from tenancy.infrastructure.structural_migrations import (
    LEDGER_TABLE_NAME,
    STRUCTURAL_MIGRATIONS,
    bind_to_namespace,
)
from tenancy.ports.exceptions import ProvisioningError

ALL_STEPS = [m.name for m in STRUCTURAL_MIGRATIONS]


def _session_with_ledger(applied: list[str]):
    """Session whose ledger already records ``applied``."""
    session = Mock(spec=AsyncSession)
    session.run_sync = AsyncMock()
    inserted: list[str] = []

    async def _execute(statement, *args, **kwargs):
        if isinstance(statement, Select):
            result = MagicMock()
            result.scalars.return_value.all.return_value = list(applied)
            return result
        if isinstance(statement, Insert):
            inserted.append(statement.compile().params["name"])
        return MagicMock()

    session.execute = AsyncMock(side_effect=_execute)
    session.inserted = inserted
    return session


@pytest.fixture
def mock_probe():
    return Mock(spec=NamespaceProbe)


class TestProvision:
    @pytest.mark.asyncio
    async def test_fresh_namespace_gets_every_step_in_order(self, mock_probe):
        session = _session_with_ledger([])
        provisioner = NamespaceProvisioner(session, probe=mock_probe)

        applied = await provisioner.provision(NamespaceName.for_tenant(3))

        assert applied == ALL_STEPS
        assert session.inserted == ALL_STEPS
        # ledger table plus one table per step
        assert session.run_sync.await_count == len(ALL_STEPS) + 1
        mock_probe.namespace_provisioned.assert_called_once_with(
            "namespace_3", len(ALL_STEPS)
        )

    @pytest.mark.asyncio
    async def test_only_missing_steps_are_applied(self, mock_probe):
        session = _session_with_ledger(ALL_STEPS[:2])
        provisioner = NamespaceProvisioner(session, probe=mock_probe)

        applied = await provisioner.provision(NamespaceName.for_tenant(3))

        assert applied == ALL_STEPS[2:]
        assert mock_probe.structural_step_skipped.call_count == 2

    @pytest.mark.asyncio
    async def test_reprovisioning_is_a_noop(self, mock_probe):
        session = _session_with_ledger(ALL_STEPS)
        provisioner = NamespaceProvisioner(session, probe=mock_probe)

        applied = await provisioner.provision(NamespaceName.for_tenant(3))

        assert applied == []
        assert session.inserted == []
        assert session.run_sync.await_count == 1

    @pytest.mark.asyncio
    async def test_failing_step_is_named(self, mock_probe):
        session = _session_with_ledger([])
        error = OperationalError("CREATE TABLE", {}, Exception("disk full"))
        # ledger and first step succeed, the projects table fails
        session.run_sync.side_effect = [None, None, error]
        provisioner = NamespaceProvisioner(session, probe=mock_probe)

        with pytest.raises(ProvisioningError) as exc_info:
            await provisioner.provision(NamespaceName.for_tenant(3))

        assert exc_info.value.step == "0002_create_projects"
        assert exc_info.value.namespace == "namespace_3"
        mock_probe.provisioning_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_ledger_failure(self, mock_probe):
        session = _session_with_ledger([])
        session.run_sync.side_effect = OperationalError(
            "CREATE TABLE", {}, Exception("permission denied")
        )
        provisioner = NamespaceProvisioner(session, probe=mock_probe)

        with pytest.raises(ProvisioningError) as exc_info:
            await provisioner.provision(NamespaceName.for_tenant(3))

        assert exc_info.value.step == LEDGER_TABLE_NAME

    @pytest.mark.asyncio
    async def test_root_namespace_is_refused(self, mock_probe):
        session = _session_with_ledger([])
        provisioner = NamespaceProvisioner(session, probe=mock_probe)

        with pytest.raises(ProvisioningError):
            await provisioner.provision(NamespaceName.root())
        session.run_sync.assert_not_called()


class TestStructuralSteps:
    def test_step_names_are_unique_and_ordered(self):
        assert ALL_STEPS == sorted(set(ALL_STEPS))

    def test_every_namespace_table_has_a_step(self):
        bound = bind_to_namespace("namespace_1")
        tables = {t.name for t in bound.tables.values()} - {LEDGER_TABLE_NAME}

        assert tables == {m.table.name for m in STRUCTURAL_MIGRATIONS}

    def test_binding_sets_schema_on_every_table(self):
        bound = bind_to_namespace("namespace_9")

        assert all(t.schema == "namespace_9" for t in bound.tables.values())

    def test_foreign_keys_stay_inside_the_namespace(self):
        units = bind_to_namespace("namespace_9").tables["namespace_9.units"]

        targets = {fk.column.table.schema for fk in units.foreign_keys}
        assert targets == {"namespace_9"}

    def test_binding_does_not_touch_shared_tables(self):
        bind_to_namespace("namespace_9")

        assert all(m.table.schema is None for m in STRUCTURAL_MIGRATIONS)
