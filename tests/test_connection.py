"""
Tests for the database handle provider and the schema initializer.
"""
import asyncio
import sqlite3

import pytest
from sqlalchemy import text

from inventario.business.common.connection import Database
from inventario.business.common.errors import LegacySchemaError, StorageUnavailable
from inventario.business.common.schema import SCHEMA_VERSION, es_esquema_legado
from inventario.business.common.settings import Settings


def _legacy_db(path, ddl: str) -> None:
    conn = sqlite3.connect(path)
    try:
        conn.executescript(ddl)
        conn.commit()
    finally:
        conn.close()


class TestDatabase:
    """Open/close lifecycle."""

    async def test_open_is_idempotent(self, settings):
        db = Database(settings)
        first = await db.open()
        second = await db.open()
        assert first is second
        await db.close()

    async def test_concurrent_first_open_creates_one_engine(self, settings):
        db = Database(settings)
        engines = await asyncio.gather(*(db.open() for _ in range(5)))
        assert all(e is engines[0] for e in engines)
        await db.close()

    async def test_close_allows_clean_reopen(self, settings):
        db = Database(settings)
        first = await db.open()
        await db.close()
        assert not db.is_open
        second = await db.open()
        assert second is not first
        assert db.is_open
        await db.close()

    async def test_close_without_open_is_noop(self, settings):
        db = Database(settings)
        await db.close()
        assert not db.is_open

    async def test_unopenable_path_raises_storage_unavailable(self, tmp_path):
        db = Database(Settings(db_path=str(tmp_path / "no-existe" / "inventario.db")))
        with pytest.raises(StorageUnavailable):
            await db.open()
        assert not db.is_open

    async def test_session_opens_lazily(self, settings):
        db = Database(settings)
        async with db.session() as session:
            result = await session.execute(text("SELECT 1"))
            assert result.scalar() == 1
        assert db.is_open
        await db.close()

    async def test_in_memory_database_keeps_schema(self):
        db = Database(Settings(db_path=":memory:"))
        await db.open()
        async with db.session() as session:
            result = await session.execute(text("SELECT COUNT(*) FROM productos"))
            assert result.scalar() == 0
        await db.close()

    async def test_foreign_keys_enabled(self, session):
        result = await session.execute(text("PRAGMA foreign_keys"))
        assert result.scalar() == 1


class TestSchema:
    """Schema creation, versioning and legacy detection."""

    async def test_tables_and_indices_exist(self, session):
        tables = {
            row[0]
            for row in await session.execute(
                text("SELECT name FROM sqlite_master WHERE type = 'table'")
            )
        }
        assert {"productos", "proveedores"} <= tables

        indices = {
            row[0]
            for row in await session.execute(
                text("SELECT name FROM sqlite_master WHERE type = 'index'")
            )
        }
        assert {"idx_productos_proveedor", "idx_productos_nombre"} <= indices

    async def test_user_version_is_stamped(self, session):
        result = await session.execute(text("PRAGMA user_version"))
        assert result.scalar() == SCHEMA_VERSION

    async def test_reopening_keeps_rows(self, settings):
        db = Database(settings)
        async with db.session() as session:
            await session.execute(text("INSERT INTO proveedores (nombre) VALUES ('ACME')"))
            await session.commit()
        await db.close()

        async with db.session() as session:
            result = await session.execute(text("SELECT COUNT(*) FROM proveedores"))
            assert result.scalar() == 1
        await db.close()

    async def test_newer_schema_version_is_refused(self, settings):
        _legacy_db(settings.db_path, f"PRAGMA user_version = {SCHEMA_VERSION + 1};")
        db = Database(settings)
        with pytest.raises(StorageUnavailable):
            await db.open()

    async def test_legacy_table_without_opt_in_is_refused(self, settings):
        _legacy_db(
            settings.db_path,
            """
            CREATE TABLE productos (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                cod TEXT,
                nombre TEXT NOT NULL,
                costo INTEGER NOT NULL,
                publico INTEGER NOT NULL
            );
            INSERT INTO productos (cod, nombre, costo, publico) VALUES ('A1', 'Viejo', 1, 2);
            """,
        )
        db = Database(settings)
        with pytest.raises(LegacySchemaError):
            await db.open()
        assert not db.is_open

        # Nothing was dropped
        conn = sqlite3.connect(settings.db_path)
        try:
            assert conn.execute("SELECT COUNT(*) FROM productos").fetchone()[0] == 1
        finally:
            conn.close()

    async def test_legacy_table_with_opt_in_is_recreated(self, settings):
        _legacy_db(
            settings.db_path,
            """
            CREATE TABLE productos (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                nombre TEXT NOT NULL,
                descripcion TEXT,
                precio REAL NOT NULL
            );
            INSERT INTO productos (nombre, precio) VALUES ('Viejo', 9.5);
            """,
        )
        db = Database(settings.model_copy(update={"reset_legacy_schema": True}))
        async with db.session() as session:
            columns = {row[1] for row in await session.execute(text("PRAGMA table_info(productos)"))}
            assert {"costo", "publico", "id_proveedor", "ruta_imagen"} <= columns
            result = await session.execute(text("SELECT COUNT(*) FROM productos"))
            assert result.scalar() == 0
        await db.close()

    async def test_table_without_supplier_and_image_columns_is_refused(self, settings):
        _legacy_db(
            settings.db_path,
            """
            CREATE TABLE productos (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                nombre TEXT NOT NULL,
                costo INTEGER NOT NULL,
                publico INTEGER NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
            INSERT INTO productos (nombre, costo, publico) VALUES ('Viejo', 1, 2);
            """,
        )
        db = Database(settings)
        with pytest.raises(LegacySchemaError):
            await db.open()

        conn = sqlite3.connect(settings.db_path)
        try:
            assert conn.execute("PRAGMA user_version").fetchone()[0] == 0
            assert conn.execute("SELECT COUNT(*) FROM productos").fetchone()[0] == 1
        finally:
            conn.close()

    async def test_table_without_supplier_and_image_columns_is_rebuilt_on_opt_in(self, settings):
        _legacy_db(
            settings.db_path,
            """
            CREATE TABLE productos (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                nombre TEXT NOT NULL,
                costo INTEGER NOT NULL,
                publico INTEGER NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
            """,
        )
        db = Database(settings.model_copy(update={"reset_legacy_schema": True}))
        async with db.session() as session:
            indices = {
                row[0]
                for row in await session.execute(
                    text("SELECT name FROM sqlite_master WHERE type = 'index' AND tbl_name = 'productos'")
                )
            }
            assert {"idx_productos_proveedor", "idx_productos_nombre"} <= indices
        await db.close()

        db = Database(settings)
        async with db.session() as session:
            await session.execute(
                text("INSERT INTO productos (nombre, costo, publico) VALUES ('W', 1, 2)")
            )
            await session.commit()
        await db.close()

    def test_legacy_detection(self):
        assert not es_esquema_legado(set())
        assert es_esquema_legado({"id", "cod", "nombre", "costo", "publico"})
        assert es_esquema_legado({"id", "nombre", "precio"})
        assert es_esquema_legado({"id", "nombre", "costo", "publico", "created_at", "updated_at"})
        assert not es_esquema_legado(
            {"id", "nombre", "costo", "publico", "id_proveedor", "ruta_imagen", "created_at", "updated_at"}
        )
