# app/errors.py
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_FIELDS_MESSAGE = "Missing or invalid fields"


class ProductError(Exception):
    """Base class for errors that map directly onto an HTTP status."""

    status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ProductNotFoundError(ProductError):
    status = status.HTTP_404_NOT_FOUND
    message = "Product not found"


class ProductValidationError(ProductError):
    """A create or update payload is missing fields or has the wrong types."""

    status = status.HTTP_400_BAD_REQUEST
    message = INVALID_FIELDS_MESSAGE


class UnauthorizedError(ProductError):
    status = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def product_error_handler(request: Request, exc: ProductError) -> JSONResponse:
    return error_response(exc.status, exc.message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Unknown routes and disallowed methods keep their status."""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug(f"Rejected request body for {request.url.path}: {exc.errors()}")
    return error_response(status.HTTP_400_BAD_REQUEST, INVALID_FIELDS_MESSAGE)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    status_code = getattr(exc, "status", None)
    if not isinstance(status_code, int) or isinstance(status_code, bool):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return error_response(status_code, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProductError, product_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
