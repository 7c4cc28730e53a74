"""Command line entry points for structural setup.

Usage:
    housingram-migrate root [--revision head]
    housingram-migrate tenant <namespace|all>
    housingram-migrate status <namespace>

The root namespace is migrated with Alembic. Tenant namespaces are
provisioned with the same ledger-backed steps onboarding uses, so running
``tenant`` against an up-to-date namespace is a no-op.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from iam.infrastructure.principal_repository import PrincipalRepository
from infrastructure.database.dependencies import (
    close_database_connections,
    get_sessionmaker,
)
from infrastructure.database.scoping import ScopedSession
from infrastructure.logging import configure_logging
from shared_kernel.namespaces import NamespaceName
from tenancy.application.cross_namespace_lookup import CrossNamespaceLookup
from tenancy.infrastructure.namespace_provisioner import NamespaceProvisioner
from tenancy.infrastructure.namespace_registry import PostgresNamespaceRegistry
from tenancy.infrastructure.tenant_repository import TenantRepository
from tenancy.ports.exceptions import ProvisioningError

ALL_NAMESPACES = "all"
MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "infrastructure" / "migrations"

console = Console()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="housingram-migrate",
        description="Structural setup for the root and tenant namespaces",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s root
  %(prog)s tenant namespace_42
  %(prog)s tenant all
  %(prog)s status namespace_42
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    root = subparsers.add_parser("root", help="Migrate the root namespace")
    root.add_argument(
        "--revision", default="head", help="Target Alembic revision (default: head)"
    )

    tenant = subparsers.add_parser(
        "tenant", help="Provision one tenant namespace, or all active ones"
    )
    tenant.add_argument("namespace", help=f"Namespace name or '{ALL_NAMESPACES}'")

    status = subparsers.add_parser(
        "status", help="Show applied and pending steps of a namespace"
    )
    status.add_argument("namespace", help="Namespace name")

    return parser.parse_args(argv)


def alembic_config() -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    return config


def migrate_root(revision: str) -> int:
    console.print(f"[bold cyan]Migrating root namespace to {revision}[/bold cyan]")
    command.upgrade(alembic_config(), revision)
    console.print("[green]✓[/green] Root namespace is up to date")
    return 0


def _parse_namespace(value: str) -> NamespaceName | None:
    try:
        namespace = NamespaceName.from_string(value)
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return None
    if namespace.is_root:
        console.print(
            "[bold red]Error:[/bold red] the root namespace is migrated with "
            "'root', not 'tenant'"
        )
        return None
    return namespace


async def _target_namespaces(target: str) -> list[NamespaceName] | None:
    if target != ALL_NAMESPACES:
        namespace = _parse_namespace(target)
        return None if namespace is None else [namespace]

    async with get_sessionmaker()() as session:
        lookup = CrossNamespaceLookup(
            tenant_repository=TenantRepository(session),
            namespace_registry=PostgresNamespaceRegistry(session),
            principal_repository_factory=lambda ns: PrincipalRepository(
                ScopedSession(session, ns)
            ),
        )
        return [active.namespace for active in await lookup.active_namespaces()]


async def provision_tenants(target: str) -> int:
    namespaces = await _target_namespaces(target)
    if namespaces is None:
        return 1
    if not namespaces:
        console.print("[yellow]No active tenant namespaces found[/yellow]")
        return 0

    failures = 0
    for namespace in namespaces:
        async with get_sessionmaker()() as session:
            registry = PostgresNamespaceRegistry(session)
            provisioner = NamespaceProvisioner(session)
            try:
                async with session.begin():
                    if not await registry.exists(namespace):
                        raise ProvisioningError(
                            "Namespace is not registered", namespace.value
                        )
                    applied = await provisioner.provision(namespace)
            except ProvisioningError as e:
                failures += 1
                console.print(f"[red]✗[/red] [{namespace}] {e}")
                continue

        if applied:
            console.print(
                f"[green]✓[/green] [{namespace}] applied {len(applied)} step(s)"
            )
            for name in applied:
                console.print(f"    - {name}")
        else:
            console.print(f"[dim][{namespace}] already up to date[/dim]")

    return 1 if failures else 0


async def show_status(target: str) -> int:
    namespace = _parse_namespace(target)
    if namespace is None:
        return 1

    async with get_sessionmaker()() as session:
        if not await PostgresNamespaceRegistry(session).exists(namespace):
            console.print(f"[bold red]Error:[/bold red] {namespace} is not registered")
            return 1
        steps = await NamespaceProvisioner(session).status(namespace)

    table = Table(title=f"Structural steps of {namespace}")
    table.add_column("Step")
    table.add_column("Applied at")
    for name, applied_at in steps:
        table.add_row(
            name,
            applied_at.isoformat() if applied_at else "[yellow]pending[/yellow]",
        )
    console.print(table)
    return 0


async def _run_async(args: argparse.Namespace) -> int:
    try:
        if args.command == "tenant":
            return await provision_tenants(args.namespace)
        return await show_status(args.namespace)
    finally:
        await close_database_connections()


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    configure_logging()
    args = parse_args(argv)

    if args.command == "root":
        sys.exit(migrate_root(args.revision))
    sys.exit(asyncio.run(_run_async(args)))


if __name__ == "__main__":
    main()
