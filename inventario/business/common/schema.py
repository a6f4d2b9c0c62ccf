import logging

from sqlalchemy.engine import Connection

from .base import Base
from .errors import LegacySchemaError, StorageUnavailable

# Registrar las entidades en Base.metadata
from ..entities.proveedor import Proveedor  # noqa: F401
from ..entities.producto import Producto

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _columnas(connection: Connection, tabla: str) -> set:
    rows = connection.exec_driver_sql(f"PRAGMA table_info({tabla})").fetchall()
    return {row[1] for row in rows}


def es_esquema_legado(columnas: set) -> bool:
    """
    A `productos` table from an older layout: it has the `cod` column or
    lacks any column the current `Producto` mapping needs (the single REAL
    `precio` variant, or the one without supplier and image columns).
    """
    if not columnas:
        return False
    return "cod" in columnas or not set(Producto.__table__.columns.keys()) <= columnas


def init_schema(connection: Connection, allow_legacy_reset: bool = False) -> None:
    """
    Create tables and indices if missing and stamp PRAGMA user_version.

    Runs on a sync connection (`AsyncConnection.run_sync`). Safe to call
    repeatedly.
    """
    version = connection.exec_driver_sql("PRAGMA user_version").scalar() or 0
    if version > SCHEMA_VERSION:
        raise StorageUnavailable(
            "La base de datos fue creada por una versión más reciente de la aplicación"
        )

    if es_esquema_legado(_columnas(connection, "productos")):
        if not allow_legacy_reset:
            raise LegacySchemaError()
        logger.warning(
            "Legacy productos table detected, dropping it (all existing products are lost)"
        )
        connection.exec_driver_sql("DROP TABLE IF EXISTS productos")

    Base.metadata.create_all(connection, checkfirst=True)

    if version < SCHEMA_VERSION:
        connection.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")
        logger.info(f"Schema stamped at version {SCHEMA_VERSION} (was {version})")
