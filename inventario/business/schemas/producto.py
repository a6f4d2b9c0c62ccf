from datetime import datetime
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ProductoCreate(BaseModel):
    """Datos para crear un producto. Precios en centavos."""
    nombre: str = Field(..., description="Nombre del producto", max_length=200)
    costo: int = Field(..., description="Costo del producto en centavos", ge=0, strict=True)
    publico: int = Field(..., description="Precio al público en centavos", ge=0, strict=True)
    id_proveedor: Optional[int] = Field(None, description="Proveedor del producto", gt=0)

    @field_validator("nombre")
    @classmethod
    def nombre_no_vacio(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("El nombre del producto es obligatorio")
        return v.strip()


class ProductoPatch(BaseModel):
    """
    Cambios parciales sobre un producto.

    Un campo omitido no se toca; un campo enviado como None se limpia
    (solo id_proveedor y ruta_imagen admiten None).
    """
    model_config = ConfigDict(extra="forbid")

    nombre: Optional[str] = Field(None, max_length=200)
    costo: Optional[int] = Field(None, ge=0, strict=True)
    publico: Optional[int] = Field(None, ge=0, strict=True)
    id_proveedor: Optional[int] = Field(None, gt=0)
    ruta_imagen: Optional[str] = Field(None, max_length=255)

    @field_validator("nombre")
    @classmethod
    def nombre_no_vacio(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("El nombre del producto no puede estar vacío")
        return v.strip() if v is not None else v

    @model_validator(mode="after")
    def requeridos_no_nulos(self):
        for campo in ("nombre", "costo", "publico"):
            if campo in self.model_fields_set and getattr(self, campo) is None:
                raise ValueError(f"El campo {campo} no puede ser nulo")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ProductoRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    costo: int
    publico: int
    id_proveedor: Optional[int] = None
    proveedor_nombre: Optional[str] = None
    ruta_imagen: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProductoPage(BaseModel):
    items: List[ProductoRead]
    page: int
    page_size: int
    total: int
