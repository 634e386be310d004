"""
Works API - Database Handle & Session Management
=================================================

What:  The `Database` handle (async engine + session factory), the ORM base
       class, and the FastAPI session dependency.
How:   `Database` is constructed explicitly by the application factory,
       opened in the lifespan (`connect()`), stored on `app.state.database`,
       and closed on shutdown (`disconnect()`). Requests get their own
       AsyncSession from it through `get_db_session`.

Lifecycle:
    Database(url)      → no connections yet
    await connect()    → engine created, `works` table created if missing
    session()          → one AsyncSession per unit of work
    await disconnect() → all pooled connections closed
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from worksapi.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


class Database:
    """
    Explicitly owned connection handle for the works store.

    Attributes:
        url:     SQLAlchemy async URL (postgresql+asyncpg://..., sqlite+aiosqlite://...)
        engine:  AsyncEngine, None until connect() has run
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_pre_ping = pool_pre_ping
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            url=settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def _engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"echo": self.echo}
        # SQLite uses its own pool classes; sizing options only fit server DBs
        if not self.url.startswith("sqlite"):
            options.update(
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
                pool_pre_ping=self.pool_pre_ping,
                pool_recycle=3600,
            )
        return options

    async def connect(self) -> None:
        """
        Create the engine and make sure the `works` table exists.

        Raises whatever the driver raises when the database is unreachable;
        the lifespan lets that abort startup.
        """
        if self.engine is not None:
            return

        # Registers Work on Base.metadata before create_all
        from worksapi.models import work  # noqa: F401

        engine = create_async_engine(self.url, **self._engine_options())
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            await engine.dispose()
            raise

        self.engine = engine
        # expire_on_commit=False keeps attributes readable after commit
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Connected to database: %s", engine.url.render_as_string(hide_password=True))

    async def disconnect(self) -> None:
        """Dispose the engine, closing every pooled connection."""
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Database connection closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that commits on success and rolls back on error.
        """
        if self._session_factory is None:
            raise RuntimeError("Database is not connected; call connect() first")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> bool:
        """Run SELECT 1; False when not connected or the query fails."""
        if self.engine is None:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/works")
        async def list_works(db: AsyncSession = Depends(get_db_session)):
            return await work_service.find_all(db)
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
