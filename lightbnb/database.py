"""
Database connection and session management.
Owns the async SQLAlchemy engine (the shared connection pool) with explicit startup and shutdown.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from sqlalchemy import event, text
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional
from lightbnb.config import Settings, get_settings
from lightbnb.utils.exceptions import DatabaseConnectionError
import logging

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all database models."""
    
    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Process-wide database handle.
    Created once, connected on startup, disposed on shutdown and injected into the gateway.
    """
    
    def __init__(self, url: Optional[str] = None, settings: Optional[Settings] = None, **engine_kwargs: Any):
        """
        Initialize the database handle without opening any connection.
        
        Args:
            url: SQLAlchemy async URL, defaults to the configured database URL
            settings: Settings instance, defaults to the cached process settings
            engine_kwargs: Extra keyword arguments passed to create_async_engine
        """
        self.settings = settings or get_settings()
        self.url = url or self.settings.sqlalchemy_database_url
        self.engine_kwargs = engine_kwargs
        self.engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None
    
    @property
    def is_connected(self) -> bool:
        return self.engine is not None
    
    def _build_engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"echo": self.settings.debug}
        
        if self.url.startswith("sqlite"):
            # Single shared connection so in-memory databases survive across sessions
            options.update(
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            options.update(
                pool_size=self.settings.pool_size,
                max_overflow=self.settings.max_overflow,
                pool_pre_ping=True,
                pool_recycle=self.settings.pool_recycle,
                pool_timeout=self.settings.pool_timeout,
            )
        
        options.update(self.engine_kwargs)
        return options
    
    async def connect(self) -> None:
        """
        Create the engine and session factory.
        Safe to call more than once; later calls are no-ops.
        """
        if self.engine is not None:
            return
        
        self.engine = create_async_engine(self.url, **self._build_engine_options())
        if self.url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info(f"Database engine created for {self.engine.url.render_as_string(hide_password=True)}")
    
    async def dispose(self) -> None:
        """
        Close every pooled connection.
        This should be called during application shutdown.
        """
        if self.engine is None:
            return
        
        await self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Database connections closed")
    
    async def __aenter__(self) -> "Database":
        await self.connect()
        return self
    
    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.dispose()
    
    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield an async session checked out from the pool.
        Rolls back on error and always returns the connection to the pool.
        
        Raises:
            DatabaseConnectionError: If connect() has not been called
        """
        if self._session_factory is None:
            raise DatabaseConnectionError("Database is not connected")
        
        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
    
    async def check_connection(self) -> bool:
        """
        Test database connectivity.
        Returns True if connection is successful, False otherwise.
        """
        try:
            async with self.session() as session:
                result = await session.execute(text("SELECT 1"))
                result.scalar()
            logger.info("Database connection successful")
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False
    
    async def create_tables(self) -> None:
        """Create all database tables."""
        if self.engine is None:
            raise DatabaseConnectionError("Database is not connected")
        
        # Register every table on the metadata
        import lightbnb.models  # noqa: F401
        
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")
    
    async def drop_tables(self) -> None:
        """
        Drop all database tables.
        This should only be used in testing or development.
        """
        if self.settings.is_production:
            raise RuntimeError("Cannot drop tables in production environment")
        if self.engine is None:
            raise DatabaseConnectionError("Database is not connected")
        
        import lightbnb.models  # noqa: F401
        
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")
    
    def pool_status(self) -> Dict[str, Any]:
        """Connection pool status for monitoring."""
        if self.engine is None:
            return {"connected": False}
        
        pool = self.engine.pool
        return {
            "connected": True,
            "pool_class": type(pool).__name__,
            "status": pool.status(),
        }
