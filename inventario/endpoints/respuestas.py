from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..business.common.errors import ErrorCode
from ..business.schemas.respuesta import ApiResponse

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONSTRAINT_VIOLATION: 409,
    ErrorCode.IMAGE_IO_ERROR: 500,
    ErrorCode.STORAGE_UNAVAILABLE: 503,
    ErrorCode.UNEXPECTED: 500,
}


def to_http(response: ApiResponse) -> JSONResponse:
    status_code = 200 if response.success else STATUS_BY_CODE.get(response.error_code, 500)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(response))
