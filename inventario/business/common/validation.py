from typing import Optional

from .errors import ValidationError


def validar_nombre(nombre, entidad: str = "producto") -> str:
    if not isinstance(nombre, str) or not nombre.strip():
        raise ValidationError(f"El nombre del {entidad} es obligatorio")
    return nombre.strip()


def validar_centavos(valor, campo: str) -> int:
    # bool es subclase de int
    if isinstance(valor, bool) or not isinstance(valor, int):
        raise ValidationError(f"El {campo} debe ser un entero en centavos")
    if valor < 0:
        raise ValidationError(f"El {campo} no puede ser negativo")
    return valor


def validar_id(valor, campo: str = "id") -> Optional[int]:
    if valor is None:
        return None
    if isinstance(valor, bool) or not isinstance(valor, int) or valor <= 0:
        raise ValidationError(f"El {campo} debe ser un entero positivo")
    return valor
