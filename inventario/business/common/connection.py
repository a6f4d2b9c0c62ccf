import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from .errors import InventarioError, StorageUnavailable
from .schema import init_schema
from .settings import Settings

logger = logging.getLogger(__name__)


def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE SET NULL unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owned handle to the embedded SQLite store.

    `open()` creates the engine and runs the schema initializer once;
    concurrent first calls wait on the same lock. `close()` disposes the
    engine so a later `open()` starts from scratch.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings.from_env()
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def _create_engine(self) -> AsyncEngine:
        kwargs = {"echo": self.settings.db_echo}
        if self.settings.db_path == ":memory:":
            # Una sola conexión, si no cada conexión ve una base vacía
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        engine = create_async_engine(self.settings.database_url, **kwargs)
        event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
        return engine

    async def open(self) -> AsyncEngine:
        if self._engine is not None:
            return self._engine
        async with self._lock:
            if self._engine is not None:
                return self._engine
            engine = self._create_engine()
            try:
                async with engine.begin() as conn:
                    await conn.run_sync(
                        init_schema,
                        allow_legacy_reset=self.settings.reset_legacy_schema,
                    )
            except InventarioError:
                await engine.dispose()
                raise
            except (SQLAlchemyError, OSError) as e:
                await engine.dispose()
                logger.error(f"Cannot open database at {self.settings.db_path}: {e}")
                raise StorageUnavailable() from e
            self._engine = engine
            self._sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
            logger.info(f"Database initialized at {self.settings.db_path}")
            return engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            await self.open()
        async with self._sessionmaker() as session:
            yield session

    async def close(self) -> None:
        async with self._lock:
            if self._engine is None:
                return
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None
            logger.info("Database closed")
