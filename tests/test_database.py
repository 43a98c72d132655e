"""
Tests for the database handle lifecycle.
"""

import pytest

from lightbnb.config import Settings
from lightbnb.database import Database
from lightbnb.utils.exceptions import DatabaseConnectionError


class TestDatabase:
    
    @pytest.mark.asyncio
    async def test_connect_and_dispose(self, test_settings: Settings):
        database = Database(settings=test_settings)
        assert database.is_connected is False
        assert database.pool_status() == {"connected": False}
        
        await database.connect()
        assert database.is_connected is True
        assert await database.check_connection() is True
        assert database.pool_status()["connected"] is True
        
        await database.dispose()
        assert database.is_connected is False
    
    @pytest.mark.asyncio
    async def test_connect_twice_keeps_engine(self, test_settings: Settings):
        database = Database(settings=test_settings)
        await database.connect()
        engine = database.engine
        
        await database.connect()
        
        assert database.engine is engine
        await database.dispose()
    
    @pytest.mark.asyncio
    async def test_async_context_manager(self, test_settings: Settings):
        async with Database(settings=test_settings) as database:
            assert await database.check_connection() is True
        
        assert database.is_connected is False
    
    @pytest.mark.asyncio
    async def test_session_requires_connect(self, test_settings: Settings):
        database = Database(settings=test_settings)
        
        with pytest.raises(DatabaseConnectionError):
            async with database.session():
                pass
    
    @pytest.mark.asyncio
    async def test_check_connection_when_not_connected(self, test_settings: Settings):
        assert await Database(settings=test_settings).check_connection() is False
    
    @pytest.mark.asyncio
    async def test_drop_tables_refused_in_production(self):
        settings = Settings(environment="production", database_url="sqlite+aiosqlite://")
        
        async with Database(settings=settings) as database:
            with pytest.raises(RuntimeError):
                await database.drop_tables()
