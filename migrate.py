#!/usr/bin/env python3
"""
Database schema management script.
Creates, drops or checks the LightBnB tables on the configured database.
"""

import asyncio
import sys
import argparse
import logging
from typing import List, Optional

from lightbnb.config import get_settings
from lightbnb.database import Database

logger = logging.getLogger("migrate")


class MigrationManager:
    """Runs schema operations against one database."""
    
    def __init__(self, database: Database):
        self.database = database
    
    async def create(self) -> None:
        """Create every table."""
        await self.database.create_tables()
    
    async def drop(self) -> None:
        """Drop every table."""
        await self.database.drop_tables()
    
    async def reset(self) -> None:
        """Drop and recreate every table."""
        await self.drop()
        await self.create()
    
    async def check(self) -> bool:
        """Check that the database answers."""
        return await self.database.check_connection()
    
    async def run(self, command: str) -> int:
        await self.database.connect()
        try:
            if command == "check":
                return 0 if await self.check() else 1
            await getattr(self, command)()
            return 0
        finally:
            await self.database.dispose()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="LightBnB database schema management")
    parser.add_argument(
        "command",
        choices=["create", "drop", "reset", "check"],
        help="Schema operation to run"
    )
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy async URL, overrides the configured database"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    
    manager = MigrationManager(Database(url=args.database_url, settings=settings))
    try:
        return asyncio.run(manager.run(args.command))
    except Exception as e:
        logger.error(f"Migration command '{args.command}' failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
