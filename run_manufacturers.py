#!/usr/bin/env python3
"""
Main entry point for the manufacturers store.
Runs one repository operation against PostgreSQL per invocation.
"""

import argparse
import sys
from typing import Optional, List

import psycopg2
import structlog
from dotenv import load_dotenv

from manufacturer_store.config import DatabaseConfig
from manufacturer_store.database.db_manager import DatabaseManager
from manufacturer_store.database.repositories import ManufacturersRepository
from manufacturer_store.exceptions import PersistenceError
from manufacturer_store.models import Manufacturer

# Configure structured logging
structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer()
    ]
)

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="CRUD operations on the manufacturers table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_manufacturers.py create Toyota Japan
  python run_manufacturers.py get 1
  python run_manufacturers.py list
  python run_manufacturers.py update 1 Toyota USA
  python run_manufacturers.py delete 1
  python run_manufacturers.py demo
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Insert a manufacturer")
    create.add_argument("name")
    create.add_argument("country")

    get = subparsers.add_parser("get", help="Show a manufacturer by id (deleted ones included)")
    get.add_argument("id", type=int)

    subparsers.add_parser("list", help="List manufacturers that are not deleted")

    update = subparsers.add_parser("update", help="Overwrite name and country")
    update.add_argument("id", type=int)
    update.add_argument("name")
    update.add_argument("country")

    delete = subparsers.add_parser("delete", help="Mark a manufacturer as deleted")
    delete.add_argument("id", type=int)

    subparsers.add_parser("demo", help="Run a create/read/update/delete walkthrough")

    return parser.parse_args(argv)


def format_manufacturer(manufacturer: Manufacturer) -> str:
    return f"#{manufacturer.id} {manufacturer.name} ({manufacturer.country})"


def cmd_create(repo: ManufacturersRepository, args: argparse.Namespace) -> int:
    manufacturer = repo.create(Manufacturer(name=args.name, country=args.country))
    print(f"✓ Created {format_manufacturer(manufacturer)}")
    return EXIT_OK


def cmd_get(repo: ManufacturersRepository, args: argparse.Namespace) -> int:
    manufacturer = repo.get_by_id(args.id)
    if manufacturer is None:
        print(f"✗ No manufacturer with id {args.id}")
        return EXIT_NOT_FOUND
    print(format_manufacturer(manufacturer))
    return EXIT_OK


def cmd_list(repo: ManufacturersRepository, args: argparse.Namespace) -> int:
    manufacturers = repo.get_all()
    for manufacturer in manufacturers:
        print(format_manufacturer(manufacturer))
    print(f"\n{len(manufacturers)} manufacturer(s)")
    return EXIT_OK


def cmd_update(repo: ManufacturersRepository, args: argparse.Namespace) -> int:
    updated = repo.update(Manufacturer(id=args.id, name=args.name, country=args.country))
    if updated is None:
        print(f"✗ No manufacturer with id {args.id}")
        return EXIT_NOT_FOUND
    print(f"✓ Updated {format_manufacturer(updated)}")
    return EXIT_OK


def cmd_delete(repo: ManufacturersRepository, args: argparse.Namespace) -> int:
    if repo.delete(args.id):
        print(f"✓ Deleted manufacturer {args.id}")
    else:
        print(f"✗ Nothing to delete for id {args.id}")
    return EXIT_OK


def cmd_demo(repo: ManufacturersRepository, args: argparse.Namespace) -> int:
    """Walk one manufacturer through its whole lifecycle."""
    toyota = repo.create(Manufacturer(name="Toyota", country="Japan"))
    print(f"1. create      -> {format_manufacturer(toyota)}")

    found = repo.get_by_id(toyota.id)
    print(f"2. get_by_id   -> {format_manufacturer(found) if found else None}")

    toyota.country = "USA"
    updated = repo.update(toyota)
    print(f"3. update      -> {format_manufacturer(updated) if updated else None}")

    listed = [m.id for m in repo.get_all()]
    print(f"4. get_all     -> contains {toyota.id}: {toyota.id in listed}")

    print(f"5. delete      -> {repo.delete(toyota.id)}")

    listed = [m.id for m in repo.get_all()]
    print(f"6. get_all     -> contains {toyota.id}: {toyota.id in listed}")

    # Logically deleted rows are still reachable by id
    found = repo.get_by_id(toyota.id)
    print(f"7. get_by_id   -> {format_manufacturer(found) if found else None}")
    return EXIT_OK


COMMANDS = {
    "create": cmd_create,
    "get": cmd_get,
    "list": cmd_list,
    "update": cmd_update,
    "delete": cmd_delete,
    "demo": cmd_demo,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_arguments(argv)
    db_manager = None

    try:
        load_dotenv()
        config = DatabaseConfig()
        logger.info("config_loaded", host=config.host, database=config.name)

        db_manager = DatabaseManager(config)
        repo = ManufacturersRepository(db_manager)

        return COMMANDS[args.command](repo, args)

    except PersistenceError as e:
        logger.error("persistence_error", command=args.command, error=e.message, cause=str(e.cause))
        print(f"\n❌ {e.message}: {e.cause}")
        return EXIT_ERROR

    except psycopg2.Error as e:
        logger.error("database_unavailable", error=str(e))
        print(f"\n❌ Database unavailable: {e}")
        return EXIT_ERROR

    finally:
        if db_manager is not None:
            db_manager.close()


if __name__ == "__main__":
    sys.exit(main())
