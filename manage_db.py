#!/usr/bin/env python3
"""
Database management script for Timebill.
Creates the schema and seeds the first administrator account.
"""

import argparse
import getpass
import sys

from timebill.application.dto.user_dto import CreateUserRequestDTO
from timebill.application.use_cases.user_use_cases import CreateUserUseCase
from timebill.config import get_settings
from timebill.domain.models.base import DomainException
from timebill.domain.models.user import UserRole
from timebill.infrastructure.auth.password import BcryptPasswordHasher
from timebill.infrastructure.container import SQLAlchemyRepositoryProvider


def create_tables(provider: SQLAlchemyRepositoryProvider) -> None:
    """Create every table that does not exist yet."""
    print("Creating tables...")
    provider.startup()
    print("Done.")


def seed_admin(provider: SQLAlchemyRepositoryProvider, email: str, name: str, password: str) -> None:
    """Create an administrator account."""
    provider.startup()
    request = CreateUserRequestDTO(email=email, name=name, role=UserRole.ADMINISTRATOR, password=password)
    with provider.scope() as repositories:
        user = CreateUserUseCase(repositories, BcryptPasswordHasher()).execute(None, request)
    print(f"Administrator {user.email} created with id {user.id}")


def main(argv=None) -> int:
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Manage the Timebill database")
    parser.add_argument("--database-url", help="Overrides DATABASE_URL")
    subcommands = parser.add_subparsers(dest="command", required=True)

    subcommands.add_parser("create-tables", help="Create all tables")

    seed = subcommands.add_parser("seed-admin", help="Create an administrator account")
    seed.add_argument("email")
    seed.add_argument("--name", default="Administrator")
    seed.add_argument("--password", help="Prompted for when omitted")

    args = parser.parse_args(argv)
    settings = get_settings()
    provider = SQLAlchemyRepositoryProvider(args.database_url or settings.database_url)

    try:
        if args.command == "create-tables":
            create_tables(provider)
        elif args.command == "seed-admin":
            password = args.password or getpass.getpass("Password: ")
            seed_admin(provider, args.email, args.name, password)
    except DomainException as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    finally:
        provider.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
