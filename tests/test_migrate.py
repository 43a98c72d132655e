"""
Tests for the schema management script.
"""

import pytest

import migrate
from lightbnb.config import Settings
from lightbnb.database import Database


class TestMigrate:
    
    def test_parse_args(self):
        args = migrate.parse_args(["create", "--database-url", "sqlite+aiosqlite://"])
        
        assert args.command == "create"
        assert args.database_url == "sqlite+aiosqlite://"
    
    def test_parse_args_rejects_unknown_command(self):
        with pytest.raises(SystemExit):
            migrate.parse_args(["upgrade"])
    
    @pytest.mark.asyncio
    async def test_run_disposes_engine(self, test_settings: Settings):
        database = Database(settings=test_settings)
        manager = migrate.MigrationManager(database)
        
        assert await manager.run("reset") == 0
        assert await manager.run("check") == 0
        assert database.is_connected is False
