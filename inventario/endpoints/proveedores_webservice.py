from fastapi import APIRouter, Depends
from fastapi_utils.cbv import cbv

from ..business.controllers.productos_controller import ProductosController
from ..business.controllers.proveedores_controller import ProveedoresController
from ..business.schemas.proveedor import ProveedorCreate, ProveedorPatch
from .dependencies import get_productos_controller, get_proveedores_controller
from .respuestas import to_http


proveedores_webservice_api_router = APIRouter()


@cbv(proveedores_webservice_api_router)
class ProveedoresWebService:
    controller: ProveedoresController = Depends(get_proveedores_controller)
    productos: ProductosController = Depends(get_productos_controller)

    @proveedores_webservice_api_router.get("/api/proveedores")
    async def get_all(self):
        return to_http(await self.controller.get_all_proveedores())

    @proveedores_webservice_api_router.get("/api/proveedores/{id}")
    async def get_by_id(self, id: int):
        return to_http(await self.controller.get_proveedor_by_id(id))

    @proveedores_webservice_api_router.get("/api/proveedores/{id}/productos")
    async def get_productos(self, id: int):
        return to_http(await self.productos.get_productos_by_proveedor(id))

    @proveedores_webservice_api_router.post("/api/proveedores")
    async def create(self, dto: ProveedorCreate):
        return to_http(await self.controller.create_proveedor(dto))

    @proveedores_webservice_api_router.patch("/api/proveedores/{id}")
    async def update(self, id: int, dto: ProveedorPatch):
        return to_http(await self.controller.update_proveedor(id, dto))

    @proveedores_webservice_api_router.delete("/api/proveedores/{id}")
    async def delete(self, id: int):
        return to_http(await self.controller.delete_proveedor(id))
