from datetime import datetime
from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProveedorCreate(BaseModel):
    """Datos para crear un proveedor."""
    nombre: str = Field(..., description="Nombre o razón social del proveedor", max_length=200)
    contacto: Optional[str] = Field(None, description="Persona de contacto")
    telefono: Optional[str] = Field(None, description="Teléfono de contacto", max_length=30)

    @field_validator("nombre")
    @classmethod
    def nombre_no_vacio(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("El nombre del proveedor es obligatorio")
        return v.strip()


class ProveedorPatch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    nombre: Optional[str] = Field(None, max_length=200)
    contacto: Optional[str] = None
    telefono: Optional[str] = Field(None, max_length=30)

    @field_validator("nombre")
    @classmethod
    def nombre_no_vacio(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            raise ValueError("El nombre del proveedor no puede ser nulo")
        if not v.strip():
            raise ValueError("El nombre del proveedor no puede estar vacío")
        return v.strip()

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ProveedorRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    contacto: Optional[str] = None
    telefono: Optional[str] = None
    created_at: datetime
    updated_at: datetime
