from sqlalchemy import select, update
from sqlalchemy.orm import selectinload

from ..entities.producto import Producto
from ..common.dao import GenericDAO, utcnow
from ..common.errors import ValidationError
from ..common.validation import validar_nombre, validar_centavos, validar_id
from ..schemas.producto import ProductoPatch
from typing import List, Optional, Dict, Any


class ProductoDAO(GenericDAO[Producto]):
    def __init__(self, session):
        super().__init__(session, Producto)

    def _select(self):
        return select(Producto).options(selectinload(Producto.proveedor))

    def _ordering(self):
        return (Producto.nombre, Producto.id)

    async def create(
        self,
        nombre: str,
        costo: int,
        publico: int,
        id_proveedor: Optional[int] = None,
        ruta_imagen: Optional[str] = None,
    ) -> Producto:
        """Insert a product and return it read back, supplier name included."""
        producto = Producto(
            nombre=validar_nombre(nombre),
            costo=validar_centavos(costo, "costo"),
            publico=validar_centavos(publico, "precio público"),
            id_proveedor=validar_id(id_proveedor, "id_proveedor"),
            ruta_imagen=ruta_imagen or None,
        )
        return await super().create(producto)

    async def update(self, id_value: int, patch: ProductoPatch) -> Optional[Producto]:
        """Apply only the fields set in the patch; updated_at always moves."""
        return await super().update(id_value, **patch.changes())

    async def searchByNombre(self, termino: Optional[str]) -> List[Producto]:
        """Find all products whose name contains the term, ignoring case."""
        if termino is None or not termino.strip():
            return await self.findAll()
        return await self._all(
            self._select().where(Producto.nombre.icontains(termino.strip(), autoescape=True))
        )

    async def findByProveedor(self, id_proveedor: int) -> List[Producto]:
        """Find all products from a specific provider."""
        return await self._all(self._select().where(Producto.id_proveedor == id_proveedor))

    async def paginate(self, page: int, page_size: int) -> Dict[str, Any]:
        if page_size is None or page_size <= 0:
            raise ValidationError("El tamaño de página debe ser mayor que cero")
        page = page if page and page > 0 else 1
        stmt = (
            self._select()
            .order_by(*self._ordering())
            .limit(page_size)
            .offset((page - 1) * page_size)
        )
        result = await self.session.execute(stmt)
        return {
            "items": list(result.scalars().all()),
            "page": page,
            "page_size": page_size,
            "total": await self.count(),
        }

    async def clearProveedor(self, id_proveedor: int) -> int:
        """Null out the supplier reference on every product pointing at it. Does not commit."""
        result = await self.session.execute(
            update(Producto)
            .where(Producto.id_proveedor == id_proveedor)
            .values(id_proveedor=None, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
