import logging
from typing import Any, Mapping, Optional, Union

from ..common.connection import Database
from ..common.errors import NotFound, ValidationError
from ..dao.producto_dao import ProductoDAO
from ..schemas.producto import ProductoCreate, ProductoPatch, ProductoRead, ProductoPage
from ..schemas.respuesta import ApiResponse
from ..services.imagenes_service import ImageService
from ...logs.beauty_log import beauty_var_log
from .base_controller import BaseController, as_model

logger = logging.getLogger(__name__)


def _read_all(productos):
    return [ProductoRead.model_validate(p) for p in productos]


class ProductosController(BaseController):
    def __init__(self, database: Database, images: ImageService):
        super().__init__(database)
        self.images = images

    async def get_all_productos(self) -> ApiResponse:
        try:
            async with self.database.session() as session:
                productos = _read_all(await ProductoDAO(session).findAll())
            return ApiResponse.ok(productos, f"{len(productos)} productos encontrados")
        except Exception as e:
            return self._fail(e, "list products")

    async def get_producto_by_id(self, id: int) -> ApiResponse:
        try:
            async with self.database.session() as session:
                producto = await ProductoDAO(session).findById(id)
                if producto is None:
                    raise NotFound("Producto no encontrado")
                return ApiResponse.ok(ProductoRead.model_validate(producto))
        except Exception as e:
            return self._fail(e, f"get product {id}")

    async def search_productos(self, termino: Optional[str]) -> ApiResponse:
        try:
            async with self.database.session() as session:
                productos = _read_all(await ProductoDAO(session).searchByNombre(termino))
            return ApiResponse.ok(productos, f"{len(productos)} productos encontrados")
        except Exception as e:
            return self._fail(e, "search products")

    async def get_productos_by_proveedor(self, id_proveedor: int) -> ApiResponse:
        try:
            async with self.database.session() as session:
                productos = _read_all(await ProductoDAO(session).findByProveedor(id_proveedor))
            return ApiResponse.ok(
                productos, f"{len(productos)} productos encontrados para el proveedor"
            )
        except Exception as e:
            return self._fail(e, f"list products of supplier {id_proveedor}")

    async def create_producto(
        self,
        data: Union[ProductoCreate, Mapping[str, Any]],
        image_path: Optional[str] = None,
    ) -> ApiResponse:
        """
        Create a product, storing the attached image first.

        Only the generated filename is recorded. If the row cannot be
        written, the image that was just stored is removed again.
        """
        ruta_imagen = None
        try:
            data = as_model(ProductoCreate, data)
            beauty_var_log("create_producto", data.model_dump())
            if image_path:
                ruta_imagen = await self.images.save_image(image_path)
            async with self.database.session() as session:
                producto = await ProductoDAO(session).create(**data.model_dump(), ruta_imagen=ruta_imagen)
                return ApiResponse.ok(
                    ProductoRead.model_validate(producto), "Producto creado exitosamente"
                )
        except Exception as e:
            if ruta_imagen:
                await self.images.delete_image(ruta_imagen)
            return self._fail(e, "create product")

    async def update_producto(
        self,
        id: int,
        patch: Union[ProductoPatch, Mapping[str, Any]],
        image_path: Optional[str] = None,
    ) -> ApiResponse:
        """
        Apply a partial update, optionally replacing the product image.

        The old image file is deleted only once the new one is stored and
        the row points at it. Passing ruta_imagen=None clears the image.
        """
        nueva_imagen = None
        try:
            patch = as_model(ProductoPatch, patch)
            if patch.ruta_imagen is not None:
                raise ValidationError("La imagen se adjunta con image_path, no con ruta_imagen")
            beauty_var_log(f"update_producto {id}", patch.changes())

            async with self.database.session() as session:
                dao = ProductoDAO(session)
                existente = await dao.findById(id)
                if existente is None:
                    raise NotFound("Producto no encontrado")
                imagen_anterior = existente.ruta_imagen

                if image_path:
                    nueva_imagen = await self.images.save_image(image_path)
                    patch = ProductoPatch(**{**patch.changes(), "ruta_imagen": nueva_imagen})

                producto = await dao.update(id, patch)
                if producto is None:
                    raise NotFound("Producto no encontrado")
                nueva_imagen = None
                resultado = ProductoRead.model_validate(producto)

            if imagen_anterior and "ruta_imagen" in patch.model_fields_set \
                    and resultado.ruta_imagen != imagen_anterior:
                if not await self.images.delete_image(imagen_anterior):
                    logger.warning(f"Old image {imagen_anterior} of product {id} was not deleted")

            return ApiResponse.ok(resultado, "Producto actualizado exitosamente")
        except Exception as e:
            if nueva_imagen:
                await self.images.delete_image(nueva_imagen)
            return self._fail(e, f"update product {id}")

    async def delete_producto(self, id: int) -> ApiResponse:
        try:
            async with self.database.session() as session:
                dao = ProductoDAO(session)
                producto = await dao.findById(id)
                if producto is None:
                    raise NotFound("Producto no encontrado")

                # Eliminar imagen si existe; un fallo no bloquea el borrado
                if producto.ruta_imagen and not await self.images.delete_image(producto.ruta_imagen):
                    logger.warning(f"Image {producto.ruta_imagen} of product {id} was not deleted")

                await dao.delete(id)

            return ApiResponse.ok(True, "Producto eliminado exitosamente")
        except Exception as e:
            return self._fail(e, f"delete product {id}")

    async def count_productos(self) -> ApiResponse:
        try:
            async with self.database.session() as session:
                total = await ProductoDAO(session).count()
            return ApiResponse.ok(total, f"{total} productos registrados")
        except Exception as e:
            return self._fail(e, "count products")

    async def get_productos_paginated(self, page: int = 1, page_size: int = 20) -> ApiResponse:
        try:
            async with self.database.session() as session:
                pagina = await ProductoDAO(session).paginate(page, page_size)
            pagina["items"] = _read_all(pagina["items"])
            return ApiResponse.ok(ProductoPage(**pagina))
        except Exception as e:
            return self._fail(e, "paginate products")

    async def clear_all_productos(self) -> ApiResponse:
        """Remove every product and, afterwards, their stored images."""
        try:
            async with self.database.session() as session:
                dao = ProductoDAO(session)
                imagenes = [p.ruta_imagen for p in await dao.findAll() if p.ruta_imagen]
                eliminados = await dao.clearAll()
            for imagen in imagenes:
                await self.images.delete_image(imagen)
            logger.warning(f"All products removed ({eliminados} rows)")
            return ApiResponse.ok(eliminados, "Todos los productos han sido eliminados")
        except Exception as e:
            return self._fail(e, "clear products")

    async def get_producto_image(self, file_name: str) -> ApiResponse:
        try:
            if not file_name:
                raise ValidationError("Nombre de archivo no proporcionado")
            if not await self.images.image_exists(file_name):
                raise NotFound("Imagen no encontrada")
            return ApiResponse.ok(str(self.images.get_image_path(file_name)))
        except Exception as e:
            return self._fail(e, f"get image {file_name}")
