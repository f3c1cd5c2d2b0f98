"""
Maps service errors to JSON responses of the form {"error": "..."}.

Expected errors (validation, not found) answer 400 / 404 with their message.
Storage and database failures are logged with traceback and answered with a
generic 500 body.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_service.core.domain.errors import (
    NotFoundError,
    PersistenceError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
        return _error(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.info(f"{request.method} {request.url.path} not found ({exc.reason}): {exc.message}")
        return _error(404, exc.message)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.message}", exc_info=exc)
        return _error(500, "Internal server error")

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        logger.error(f"Database failure on {request.method} {request.url.path}: {exc.message}", exc_info=exc)
        return _error(500, "Database error")

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        logger.info(f"{request.method} {request.url.path} malformed: {details}")
        return _error(400, f"Invalid request: {details}")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
        return _error(500, "Internal server error")
