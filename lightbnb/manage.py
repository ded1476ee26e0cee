"""
Database management commands.
Checks connectivity and creates or drops the LightBnB tables.

    python -m lightbnb.manage check
    python -m lightbnb.manage create-tables
    python -m lightbnb.manage reset --confirm
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from lightbnb.config import Settings, get_settings, configure_logging
from lightbnb.database import Database

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Runs schema commands against a database handle."""

    def __init__(self, database: Database):
        self.database = database

    async def check(self) -> bool:
        """Check the database is reachable."""
        return await self.database.check_connection()

    async def create_tables(self) -> None:
        """Create all tables that do not exist yet."""
        await self.database.create_tables()

    async def drop_tables(self) -> None:
        """Drop all tables."""
        logger.warning("Dropping all tables - all data will be lost!")
        await self.database.drop_tables()

    async def reset(self) -> None:
        """Reset the database by dropping and recreating all tables."""
        await self.drop_tables()
        await self.create_tables()
        logger.info("Database reset completed")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lightbnb-manage", description="LightBnB database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("check", help="Check database connectivity")
    subparsers.add_parser("create-tables", help="Create all tables")

    drop_parser = subparsers.add_parser("drop-tables", help="Drop all tables (not in production)")
    drop_parser.add_argument("--confirm", action="store_true", help="Confirm dropping tables")

    reset_parser = subparsers.add_parser("reset", help="Drop and recreate all tables (not in production)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    return parser


async def run_command(args: argparse.Namespace, database: Database) -> int:
    """Run one command, closing the database afterwards. Returns an exit code."""
    manager = DatabaseManager(database)

    async with database:
        if args.command == "check":
            return 0 if await manager.check() else 1

        if args.command == "create-tables":
            await manager.create_tables()
            return 0

        if args.command in ("drop-tables", "reset"):
            if not args.confirm:
                logger.error(f"{args.command} requires --confirm flag")
                return 2
            if args.command == "reset":
                await manager.reset()
            else:
                await manager.drop_tables()
            return 0

    return 2


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    """Main CLI interface for database management."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    settings = settings or get_settings()
    configure_logging(settings)

    try:
        return asyncio.run(run_command(args, Database.from_settings(settings)))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
