"""Exception handlers that render every failure as {"message", "code"}."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import validation
from .errors import (
    BAD_REQUEST_ERROR_CODE,
    INTERNAL_SERVER_ERROR_CODE,
    NOT_FOUND_ERROR_CODE,
    OrderServiceError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "code": code})


async def order_service_error_handler(request: Request, exc: OrderServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = validation.error_from_body_errors(exc.errors())
    logger.warning(f"Rejected {request.method} {request.url.path}: {error.message}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        code = NOT_FOUND_ERROR_CODE
    elif exc.status_code >= 500:
        code = INTERNAL_SERVER_ERROR_CODE
    else:
        code = BAD_REQUEST_ERROR_CODE
    return _error_response(exc.status_code, str(exc.detail), code)


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error", INTERNAL_SERVER_ERROR_CODE
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error", INTERNAL_SERVER_ERROR_CODE
    )


def configure_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderServiceError, order_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)

    # Catch-all, last
    app.add_exception_handler(Exception, global_exception_handler)
