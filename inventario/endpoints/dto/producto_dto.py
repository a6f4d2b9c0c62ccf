from typing import Optional
from pydantic import Field

from ...business.schemas.producto import ProductoCreate, ProductoPatch


class ProductoCreateDTO(ProductoCreate):
    imagen_origen: Optional[str] = Field(None, description="Ruta local de la imagen elegida por el usuario")


class ProductoUpdateDTO(ProductoPatch):
    imagen_origen: Optional[str] = Field(None, description="Ruta local de la nueva imagen")

    def to_patch(self) -> ProductoPatch:
        return ProductoPatch(**self.model_dump(exclude_unset=True, exclude={"imagen_origen"}))
