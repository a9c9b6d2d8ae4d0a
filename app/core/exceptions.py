"""
Application exceptions and their HTTP mapping
Every failure leaves the API as {"success": false, "message": ...}
Reference: https://fastapi.tiangolo.com/tutorial/handling-errors/#install-custom-exception-handlers
"""
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Base exception for errors that map onto an HTTP response
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(AppError):
    """
    Client-supplied data failed a precondition (missing title, invalid status)
    """
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """
    No task exists for the requested id
    """
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "task not found"):
        super().__init__(message)


class StorageError(AppError):
    """
    I/O failure against the persistent store
    The underlying error text travels in `detail` and is hidden in production
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class RouteError(AppError):
    """
    No handler matches the method and path
    """
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "route not found"):
        super().__init__(message)


def error_body(message: str, detail: Any = None, expose_detail: bool = False) -> dict:
    """Build the JSON error envelope"""
    body = {"success": False, "message": message}
    if expose_detail and detail:
        body["error"] = detail
    return body


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """
    Install handlers translating application and framework errors into JSON

    Args:
        app: Application to install the handlers on
        settings: Decides whether internal error detail is exposed
    """
    expose_detail = not settings.is_production

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                f"{request.method} {request.url.path} failed: {exc.message}: {exc.detail}"
            )
        else:
            logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.detail, expose_detail),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Malformed JSON, wrong field types, non-integer ids
        logger.info(f"{request.method} {request.url.path} -> 400: {exc.errors()}")
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("invalid request data", details, expose_detail),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Unknown path or a method the path does not support
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            route_error = RouteError()
            return JSONResponse(
                status_code=route_error.status_code,
                content=error_body(route_error.message),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("internal server error", str(exc), expose_detail),
        )
