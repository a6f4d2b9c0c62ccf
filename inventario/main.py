import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .business.common.connection import Database
from .business.common.errors import ErrorCode
from .business.common.settings import Settings
from .business.controllers.productos_controller import ProductosController
from .business.controllers.proveedores_controller import ProveedoresController
from .business.schemas.respuesta import ApiResponse
from .business.services.imagenes_service import ImageService
from .endpoints.health_webservice import health_webservice_api_router
from .endpoints.productos_webservice import productos_webservice_api_router
from .endpoints.proveedores_webservice import proveedores_webservice_api_router
from .logs.beauty_log import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    database = Database(settings)
    images = ImageService(settings.images_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.open()
        await images.init_image_directory()
        logger.info("Offline API initialized successfully")
        try:
            yield
        finally:
            await database.close()
            logger.info("Offline API cleanup completed")

    app = FastAPI(title="Inventario", lifespan=lifespan)
    app.state.database = database
    app.state.productos_controller = ProductosController(database, images)
    app.state.proveedores_controller = ProveedoresController(database)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        mensaje = str(first.get("msg", "Datos inválidos")).removeprefix("Value error, ")
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder(ApiResponse.fail(mensaje, ErrorCode.VALIDATION_ERROR)),
        )

    app.include_router(health_webservice_api_router)
    app.include_router(productos_webservice_api_router)
    app.include_router(proveedores_webservice_api_router)
    return app


def run() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level, settings.log_file)
    logger.info("Starting server...")
    logger.info(f"Database file: {settings.db_path}")
    logger.info(f"Server starting on http://{settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
