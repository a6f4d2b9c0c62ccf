from sqlalchemy import Column, String, Integer, Text, CheckConstraint, DateTime
from sqlalchemy.sql import func
from ..common.base import Base


class Proveedor(Base):
    __tablename__ = "proveedores"
    __table_args__ = (
        CheckConstraint("length(trim(nombre)) > 0", name="proveedores_nombre_check"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(200), nullable=False)
    contacto = Column(Text, nullable=True)
    telefono = Column(String(30), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    def __repr__(self):
        return (
            f"<Proveedor id={self.id} nombre='{self.nombre}' "
            f"contacto='{self.contacto}' telefono='{self.telefono}'>"
        )
