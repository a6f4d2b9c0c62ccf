from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi_utils.cbv import cbv

from ..business.controllers.productos_controller import ProductosController
from ..business.schemas.producto import ProductoCreate
from .dependencies import get_productos_controller
from .respuestas import to_http
from .dto.producto_dto import ProductoCreateDTO, ProductoUpdateDTO


productos_webservice_api_router = APIRouter()


# Cada ruta delega en el controlador y devuelve el sobre {success, data, error, message}
@cbv(productos_webservice_api_router)
class ProductosWebService:
    controller: ProductosController = Depends(get_productos_controller)

    @productos_webservice_api_router.get("/api/productos")
    async def get_all(self):
        return to_http(await self.controller.get_all_productos())

    @productos_webservice_api_router.get("/api/productos/buscar")
    async def search(self, q: Optional[str] = Query(None)):
        return to_http(await self.controller.search_productos(q))

    @productos_webservice_api_router.get("/api/productos/paginado")
    async def paginated(self, page: int = 1, page_size: int = 20):
        return to_http(await self.controller.get_productos_paginated(page, page_size))

    @productos_webservice_api_router.get("/api/productos/total")
    async def count(self):
        return to_http(await self.controller.count_productos())

    @productos_webservice_api_router.get("/api/productos/imagen/{file_name}")
    async def image(self, file_name: str):
        return to_http(await self.controller.get_producto_image(file_name))

    @productos_webservice_api_router.get("/api/productos/{id}")
    async def get_by_id(self, id: int):
        return to_http(await self.controller.get_producto_by_id(id))

    @productos_webservice_api_router.post("/api/productos")
    async def create(self, dto: ProductoCreateDTO):
        data = ProductoCreate(**dto.model_dump(exclude={"imagen_origen"}))
        return to_http(await self.controller.create_producto(data, image_path=dto.imagen_origen))

    @productos_webservice_api_router.patch("/api/productos/{id}")
    async def update(self, id: int, dto: ProductoUpdateDTO):
        return to_http(await self.controller.update_producto(id, dto.to_patch(), image_path=dto.imagen_origen))

    @productos_webservice_api_router.delete("/api/productos/{id}")
    async def delete(self, id: int):
        return to_http(await self.controller.delete_producto(id))

    @productos_webservice_api_router.delete("/api/productos")
    async def clear_all(self):
        return to_http(await self.controller.clear_all_productos())
