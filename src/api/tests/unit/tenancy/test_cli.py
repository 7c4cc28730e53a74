"""Unit tests for the structural setup command line."""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from shared_kernel.namespaces import NamespaceName
from tenancy import cli


class TestParseArgs:
    def test_root_defaults_to_head(self):
        args = cli.parse_args(["root"])

        assert args.command == "root"
        assert args.revision == "head"

    def test_tenant_takes_a_namespace(self):
        args = cli.parse_args(["tenant", "namespace_42"])

        assert args.command == "tenant"
        assert args.namespace == "namespace_42"

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            cli.parse_args([])


class TestTargetNamespaces:
    @pytest.mark.asyncio
    async def test_single_namespace(self):
        namespaces = await cli._target_namespaces("namespace_42")

        assert namespaces == [NamespaceName.for_tenant(42)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["public", "tenant_42", "namespace_x"])
    async def test_root_and_malformed_names_are_refused(self, value):
        assert await cli._target_namespaces(value) is None


class TestProvisionTenants:
    @pytest.mark.asyncio
    async def test_unregistered_namespace_fails(self, mock_session):
        sessionmaker = Mock(return_value=mock_session)
        mock_session.__aenter__ = AsyncMock(return_value=mock_session)
        mock_session.__aexit__ = AsyncMock(return_value=None)
        registry = Mock()
        registry.exists = AsyncMock(return_value=False)

        with (
            patch.object(cli, "get_sessionmaker", return_value=sessionmaker),
            patch.object(cli, "PostgresNamespaceRegistry", return_value=registry),
            patch.object(cli, "NamespaceProvisioner") as provisioner_cls,
        ):
            exit_code = await cli.provision_tenants("namespace_42")

        assert exit_code == 1
        provisioner_cls.return_value.provision.assert_not_called()

    @pytest.mark.asyncio
    async def test_registered_namespace_is_provisioned(self, mock_session):
        sessionmaker = Mock(return_value=mock_session)
        mock_session.__aenter__ = AsyncMock(return_value=mock_session)
        mock_session.__aexit__ = AsyncMock(return_value=None)
        registry = Mock()
        registry.exists = AsyncMock(return_value=True)
        provisioner = Mock()
        provisioner.provision = AsyncMock(return_value=["0003_create_units"])

        with (
            patch.object(cli, "get_sessionmaker", return_value=sessionmaker),
            patch.object(cli, "PostgresNamespaceRegistry", return_value=registry),
            patch.object(cli, "NamespaceProvisioner", return_value=provisioner),
        ):
            exit_code = await cli.provision_tenants("namespace_42")

        assert exit_code == 0
        provisioner.provision.assert_awaited_once_with(NamespaceName.for_tenant(42))
