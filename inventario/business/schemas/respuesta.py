from typing import TypeVar, Generic, Optional
from pydantic import BaseModel

from ..common.errors import ErrorCode, InventarioError

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Sobre uniforme que devuelve cada operación de los controladores.

    Es un resultado etiquetado: con success=True lleva `data` (y opcionalmente
    `message`); con success=False lleva `error` y `error_code`.
    """
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data=None, message: Optional[str] = None) -> "ApiResponse":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: str, code: ErrorCode = ErrorCode.UNEXPECTED, data=None) -> "ApiResponse":
        return cls(success=False, data=data, error=error, error_code=code)

    @classmethod
    def from_error(cls, exc: InventarioError) -> "ApiResponse":
        return cls.fail(exc.message, exc.code)
