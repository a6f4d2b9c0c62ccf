from typing import Optional

from ..entities.proveedor import Proveedor
from ..common.dao import GenericDAO
from ..common.validation import validar_nombre
from ..schemas.proveedor import ProveedorPatch
from .producto_dao import ProductoDAO


class ProveedorDAO(GenericDAO[Proveedor]):
    def __init__(self, session):
        super().__init__(session, Proveedor)

    def _ordering(self):
        return (Proveedor.nombre, Proveedor.id)

    async def create(
        self, nombre: str, contacto: Optional[str] = None, telefono: Optional[str] = None
    ) -> Proveedor:
        return await super().create(
            Proveedor(
                nombre=validar_nombre(nombre, "proveedor"),
                contacto=contacto or None,
                telefono=telefono or None,
            )
        )

    async def update(self, id_value: int, patch: ProveedorPatch) -> Optional[Proveedor]:
        return await super().update(id_value, **patch.changes())

    async def delete(self, id_value: int) -> bool:
        """Delete a supplier, clearing product references in the same transaction."""
        proveedor = await self.findById(id_value)
        if proveedor is None:
            return False
        await ProductoDAO(self.session).clearProveedor(id_value)
        await self.session.delete(proveedor)
        await self._commit()
        return True
