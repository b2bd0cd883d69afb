"""
Async SQLAlchemy gateway to the relational store.

A single ``Database`` instance is shared by the whole process.  The engine
is created lazily on the first ``connect()``; every consumer goes through
``connect()`` before touching the store, so no query is attempted before
the connection has been established.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator, Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import Settings, get_settings
from utils.errors import StoreError

logger = logging.getLogger(__name__)


class Database:
    """Lazily-connected engine plus session factory."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def _create_engine(self) -> AsyncEngine:
        url = self._settings.database_url
        if url.startswith("sqlite"):
            # SQLite pools are per-connection; sizing options do not apply.
            return create_async_engine(url, echo=self._settings.db_echo)
        return create_async_engine(
            url,
            echo=self._settings.db_echo,
            pool_size=self._settings.db_pool_size,
            max_overflow=self._settings.db_max_overflow,
            pool_timeout=self._settings.db_pool_timeout,
            pool_pre_ping=True,
            pool_recycle=3600,
        )

    async def connect(self) -> None:
        """Create the engine and verify the store answers. Idempotent."""
        if self._engine is not None:
            return
        async with self._lock:
            if self._engine is not None:
                return
            engine = self._create_engine()
            try:
                async with engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
            except (SQLAlchemyError, OSError) as exc:
                await engine.dispose()
                logger.error("Database connection failed: %s", exc)
                raise StoreError("No se pudo conectar a la base de datos.") from exc

            self._session_factory = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
            self._engine = engine
            logger.info("Database connection established (%s)", engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        """Close every pooled connection; a later ``connect()`` starts over."""
        async with self._lock:
            if self._engine is None:
                return
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connection closed")

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StoreError("Database not connected.")
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session, rolling back on any error."""
        await self.connect()
        factory = self._session_factory
        if factory is None:
            raise StoreError("Database not connected.")
        async with factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def query(
        self,
        sql_text: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Run a textual statement with named bound parameters.

        Returns result rows as dicts (empty for statements without rows).
        Parameters are always bound, never interpolated into ``sql_text``.
        """
        await self.connect()
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(text(sql_text), dict(params or {}))
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            logger.exception("Query failed")
            raise StoreError() from exc


_database: Optional[Database] = None


def get_database() -> Database:
    """Return the process-wide ``Database``, creating it from settings on first use."""
    global _database
    if _database is None:
        _database = Database(get_settings())
    return _database


def set_database(database: Optional[Database]) -> None:
    """Replace the process-wide instance (app factory and tests)."""
    global _database
    _database = database


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency function — use in FastAPI `Depends(get_db_session)`."""
    async with get_database().session() as session:
        yield session
