from enum import Enum


class ErrorCode(str, Enum):
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    IMAGE_IO_ERROR = "IMAGE_IO_ERROR"
    UNEXPECTED = "UNEXPECTED"


class InventarioError(Exception):
    """Base error of the data-access layer.

    `message` is short and safe to show to the user; the original cause,
    if any, travels as `__cause__` and only reaches the logs.
    """

    code = ErrorCode.UNEXPECTED
    default_message = "Error desconocido"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class StorageUnavailable(InventarioError):
    code = ErrorCode.STORAGE_UNAVAILABLE
    default_message = "No se pudo abrir la base de datos"


class LegacySchemaError(StorageUnavailable):
    default_message = (
        "La base de datos tiene un esquema antiguo incompatible; "
        "habilite INVENTARIO_RESET_LEGACY_SCHEMA para recrearla"
    )


class ValidationError(InventarioError):
    code = ErrorCode.VALIDATION_ERROR
    default_message = "Datos inválidos"


class NotFound(InventarioError):
    code = ErrorCode.NOT_FOUND
    default_message = "Registro no encontrado"


class ConstraintViolation(InventarioError):
    code = ErrorCode.CONSTRAINT_VIOLATION
    default_message = "La base de datos rechazó la operación"


class ImageStorageError(InventarioError):
    code = ErrorCode.IMAGE_IO_ERROR
    default_message = "Error al guardar la imagen"
