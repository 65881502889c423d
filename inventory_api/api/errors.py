from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from inventory_api.core.exceptions import (
    InsufficientStock,
    InvalidAdjustmentType,
    InvalidAdjustmentValue,
    InventoryError,
    ProductNotFound,
    StorageFailure,
    VariationNotFound,
)

STATUS_BY_ERROR = {
    ProductNotFound: status.HTTP_404_NOT_FOUND,
    VariationNotFound: status.HTTP_404_NOT_FOUND,
    InvalidAdjustmentType: status.HTTP_400_BAD_REQUEST,
    InvalidAdjustmentValue: status.HTTP_400_BAD_REQUEST,
    InsufficientStock: status.HTTP_409_CONFLICT,
    StorageFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: InventoryError) -> int:
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def inventory_error_handler(request: Request, exc: InventoryError):
    code = status_for(exc)
    log = logger.bind(path=request.url.path, method=request.method)
    if code >= 500:
        log.error(f"{type(exc).__name__}: {exc.message}")
    else:
        log.info(f"{type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=code, content={"message": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'] if p != 'body') or 'body'}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": f"Invalid request: {details}"})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"message": "Internal server error."})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InventoryError, inventory_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
