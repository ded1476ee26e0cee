"""
Database connection and session management.
Wraps the async SQLAlchemy engine and session factory in an explicit handle
with an open/close lifecycle.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import Integer, text
from contextlib import asynccontextmanager
from lightbnb.config import Settings, get_settings
from typing import Any, AsyncIterator, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Every table has a serial integer primary key.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


class Database:
    """
    Handle on a connection pool and its session factory.

    Create one per process, hand out sessions per request and call
    ``close()`` on shutdown (or use it as an async context manager).
    """

    def __init__(self, url: str, allow_drop: bool = True, **engine_kwargs: Any):
        self.url = url
        self.allow_drop = allow_drop
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Database":
        """Create a database handle using pool settings from configuration."""
        settings = settings or get_settings()
        engine_kwargs: Dict[str, Any] = {"echo": settings.debug}

        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_pre_ping=True,
                pool_recycle=settings.pool_recycle,
                pool_timeout=settings.pool_timeout,
                connect_args={
                    "server_settings": {
                        "application_name": settings.app_name.lower(),
                    }
                },
            )

        return cls(settings.database_url, allow_drop=not settings.is_production, **engine_kwargs)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield an async database session and ensure it's closed after use.
        Rolls back any open transaction if the caller raises.
        """
        async with self.session_factory() as session:
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
        # Register every model on the metadata before create_all
        import lightbnb.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        """
        Drop all database tables.
        This should only be used in testing or development.
        """
        if not self.allow_drop:
            raise RuntimeError("Cannot drop tables in production environment")

        import lightbnb.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

    async def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        await self.engine.dispose()
        logger.info("Database connections closed")

    async def __aenter__(self) -> "Database":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
