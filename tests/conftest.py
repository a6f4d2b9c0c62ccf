from pathlib import Path

import pytest

from inventario.business.common.connection import Database
from inventario.business.common.settings import Settings
from inventario.business.controllers.productos_controller import ProductosController
from inventario.business.controllers.proveedores_controller import ProveedoresController
from inventario.business.services.imagenes_service import ImageService


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Fresh database file and images directory per test."""
    return Settings(
        db_path=str(tmp_path / "inventario.db"),
        images_dir=str(tmp_path / "images" / "productos"),
    )


@pytest.fixture
async def database(settings):
    db = Database(settings)
    await db.open()
    try:
        yield db
    finally:
        await db.close()


@pytest.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture
def images(settings) -> ImageService:
    return ImageService(settings.images_dir)


@pytest.fixture
def productos_controller(database, images) -> ProductosController:
    return ProductosController(database, images)


@pytest.fixture
def proveedores_controller(database) -> ProveedoresController:
    return ProveedoresController(database)


@pytest.fixture
def picked_image(tmp_path: Path) -> Path:
    """An image the user picked from outside the app directory."""
    path = tmp_path / "galeria" / "foto.PNG"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"\x89PNG\r\n\x1a\nfake-image")
    return path


@pytest.fixture
def other_image(tmp_path: Path) -> Path:
    path = tmp_path / "galeria" / "otra"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"otra-imagen")
    return path
