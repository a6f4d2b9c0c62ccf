import logging
from typing import Type, TypeVar, Union, Mapping, Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..common.connection import Database
from ..common.errors import (
    ConstraintViolation,
    ErrorCode,
    InventarioError,
    NotFound,
    ValidationError,
)
from ..schemas.respuesta import ApiResponse

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def as_model(model: Type[M], data: Union[M, Mapping[str, Any]]) -> M:
    if isinstance(data, model):
        return data
    return model.model_validate(data)


def _pydantic_message(e: PydanticValidationError) -> str:
    errors = e.errors()
    if not errors:
        return "Datos inválidos"
    first = errors[0]
    msg = str(first.get("msg", "Datos inválidos"))
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    campo = ".".join(str(p) for p in first.get("loc", ()))
    return f"{campo}: {msg}" if campo else msg


class BaseController:
    def __init__(self, database: Database):
        self.database = database

    def _fail(self, e: Exception, accion: str) -> ApiResponse:
        """Map any error to a failure envelope; nothing escapes a controller."""
        if isinstance(e, (NotFound, ValidationError)):
            logger.warning(f"Could not {accion}: {e.message}")
            return ApiResponse.from_error(e)
        if isinstance(e, InventarioError):
            logger.error(f"Could not {accion}: {e.message}", exc_info=e)
            return ApiResponse.from_error(e)
        if isinstance(e, PydanticValidationError):
            logger.warning(f"Invalid payload to {accion}: {e.error_count()} error(s)")
            return ApiResponse.fail(_pydantic_message(e), ErrorCode.VALIDATION_ERROR)
        if isinstance(e, IntegrityError):
            logger.error(f"Constraint violated trying to {accion}", exc_info=e)
            return ApiResponse.fail(ConstraintViolation.default_message, ErrorCode.CONSTRAINT_VIOLATION)
        if isinstance(e, SQLAlchemyError):
            logger.exception(f"Storage error trying to {accion}")
            return ApiResponse.fail("Error al acceder a la base de datos", ErrorCode.STORAGE_UNAVAILABLE)
        logger.exception(f"Unexpected error trying to {accion}")
        return ApiResponse.fail("Ocurrió un error inesperado", ErrorCode.UNEXPECTED)
