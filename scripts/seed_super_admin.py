#!/usr/bin/env python3
"""Create the first platform administrator.

Run after the root namespace migrations (``housingram-migrate root``).
Does nothing when an administrator with the email already exists.

Usage:
    ./scripts/seed_super_admin.py
    ./scripts/seed_super_admin.py --email admin@example.com --name "Ops Admin"

The password is read from SUPER_ADMIN_PASSWORD, or prompted for.
"""

import argparse
import asyncio
import os
import sys
from getpass import getpass

from dotenv import load_dotenv
from rich.console import Console

from iam.domain.aggregates import Principal
from iam.infrastructure.platform_user_repository import PlatformUserRepository
from infrastructure.database.dependencies import (
    close_database_connections,
    get_sessionmaker,
)
from shared_kernel.auth import BcryptPasswordHasher
from shared_kernel.validation import ValidationError, validate_password

console = Console()

load_dotenv()


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Create the first Housingram platform administrator",
    )
    parser.add_argument(
        "--email",
        default=os.getenv("SUPER_ADMIN_EMAIL", "superadmin@housingram.com"),
        help="Login email (default: from env or superadmin@housingram.com)",
    )
    parser.add_argument(
        "--name",
        default=os.getenv("SUPER_ADMIN_NAME", "Super Administrator"),
        help="Display name (default: from env or 'Super Administrator')",
    )
    return parser.parse_args()


async def seed(email: str, name: str, password: str) -> int:
    async with get_sessionmaker()() as session:
        repository = PlatformUserRepository(session)
        async with session.begin():
            existing = await repository.get_by_email(email)
            if existing is not None:
                console.print("[green]✓[/green] Platform administrator already exists")
                console.print(f"[dim]Email: {existing.email}[/dim]")
                return 0

            admin = Principal.create_platform_admin(
                name=name,
                email=email,
                password_hash=BcryptPasswordHasher().hash(password),
            )
            admin = await repository.add(admin)

    console.print("[green]✓[/green] Platform administrator created")
    console.print(f"[dim]Name: {admin.name}[/dim]")
    console.print(f"[dim]Email: {admin.email}[/dim]")
    return 0


async def run(args) -> int:
    password = os.getenv("SUPER_ADMIN_PASSWORD") or getpass("Password: ")
    try:
        validate_password(password)
        return await seed(args.email, args.name, password)
    except ValidationError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1
    finally:
        await close_database_connections()


def main():
    args = parse_args()
    console.print("[bold cyan]Housingram platform administrator seed[/bold cyan]")
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
