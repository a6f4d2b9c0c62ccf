from typing import Any, Mapping, Union

from ..common.errors import NotFound
from ..dao.proveedor_dao import ProveedorDAO
from ..schemas.proveedor import ProveedorCreate, ProveedorPatch, ProveedorRead
from ..schemas.respuesta import ApiResponse
from .base_controller import BaseController, as_model


class ProveedoresController(BaseController):
    async def get_all_proveedores(self) -> ApiResponse:
        try:
            async with self.database.session() as session:
                proveedores = [
                    ProveedorRead.model_validate(p) for p in await ProveedorDAO(session).findAll()
                ]
            return ApiResponse.ok(proveedores, f"{len(proveedores)} proveedores encontrados")
        except Exception as e:
            return self._fail(e, "list suppliers")

    async def get_proveedor_by_id(self, id: int) -> ApiResponse:
        try:
            async with self.database.session() as session:
                proveedor = await ProveedorDAO(session).findById(id)
                if proveedor is None:
                    raise NotFound("Proveedor no encontrado")
                return ApiResponse.ok(ProveedorRead.model_validate(proveedor))
        except Exception as e:
            return self._fail(e, f"get supplier {id}")

    async def create_proveedor(self, data: Union[ProveedorCreate, Mapping[str, Any]]) -> ApiResponse:
        try:
            data = as_model(ProveedorCreate, data)
            async with self.database.session() as session:
                proveedor = await ProveedorDAO(session).create(**data.model_dump())
                return ApiResponse.ok(
                    ProveedorRead.model_validate(proveedor), "Proveedor creado exitosamente"
                )
        except Exception as e:
            return self._fail(e, "create supplier")

    async def update_proveedor(
        self, id: int, patch: Union[ProveedorPatch, Mapping[str, Any]]
    ) -> ApiResponse:
        try:
            patch = as_model(ProveedorPatch, patch)
            async with self.database.session() as session:
                proveedor = await ProveedorDAO(session).update(id, patch)
                if proveedor is None:
                    raise NotFound("Proveedor no encontrado")
                return ApiResponse.ok(
                    ProveedorRead.model_validate(proveedor), "Proveedor actualizado exitosamente"
                )
        except Exception as e:
            return self._fail(e, f"update supplier {id}")

    async def delete_proveedor(self, id: int) -> ApiResponse:
        """Delete a supplier; its products stay, without supplier."""
        try:
            async with self.database.session() as session:
                deleted = await ProveedorDAO(session).delete(id)
            if not deleted:
                raise NotFound("Proveedor no encontrado")
            return ApiResponse.ok(True, "Proveedor eliminado exitosamente")
        except Exception as e:
            return self._fail(e, f"delete supplier {id}")
