from sqlalchemy import (
    Column,
    String,
    Integer,
    CheckConstraint,
    ForeignKey,
    Index,
    DateTime,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..common.base import Base


class Producto(Base):
    __tablename__ = "productos"
    __table_args__ = (
        CheckConstraint("length(trim(nombre)) > 0", name="productos_nombre_check"),
        CheckConstraint("costo >= 0", name="productos_costo_check"),
        CheckConstraint("publico >= 0", name="productos_publico_check"),
        Index("idx_productos_proveedor", "id_proveedor"),
        Index("idx_productos_nombre", "nombre"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(200), nullable=False)
    # Precios en centavos
    costo = Column(Integer, nullable=False)
    publico = Column(Integer, nullable=False)
    id_proveedor = Column(
        Integer, ForeignKey("proveedores.id", ondelete="SET NULL"), nullable=True
    )
    ruta_imagen = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    # Relationship to Proveedor, always loaded explicitly (async sessions)
    proveedor = relationship("Proveedor", foreign_keys=[id_proveedor], lazy="raise")

    @property
    def proveedor_nombre(self):
        return self.proveedor.nombre if self.proveedor is not None else None

    def __repr__(self):
        return (
            f"<Producto id={self.id} nombre='{self.nombre}' "
            f"costo={self.costo} publico={self.publico} id_proveedor={self.id_proveedor}>"
        )
