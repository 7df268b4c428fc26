"""
Application error classes and the exception handlers that turn them into responses.

Every error response has the shape {"error": {"message": ..., "status": ...}}.
Anything that is not an AppError is logged and reported as a generic 500.
"""

import logging
from typing import Any, Dict, List, Union

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

Message = Union[str, List[str]]


class AppError(Exception):
    """Base error carrying a client-facing message and an HTTP status."""

    def __init__(self, message: Message, status: int) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def as_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "status": self.status}


class BadRequestError(AppError):
    def __init__(self, message: Message = "Bad Request") -> None:
        super().__init__(message, 400)


class UnauthorizedError(AppError):
    def __init__(self, message: Message = "Unauthorized") -> None:
        super().__init__(message, 401)


class NotFoundError(AppError):
    def __init__(self, message: Message = "Not Found") -> None:
        super().__init__(message, 404)


def error_response(message: Message, status: int) -> JSONResponse:
    """Build the JSON error envelope."""
    return JSONResponse(
        status_code=status,
        content=jsonable_encoder({"error": {"message": message, "status": status}}),
    )


def format_validation_errors(errors) -> List[str]:
    """Render pydantic error dicts as "field: message" strings, in order."""
    formatted = []
    for err in errors:
        # Drop the "body"/"query"/"path" marker FastAPI prepends
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        if loc:
            formatted.append(f"{'.'.join(loc)}: {err['msg']}")
        else:
            formatted.append(err["msg"])
    return formatted


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if exc.status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(exc.message, exc.status)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(format_validation_errors(exc.errors()), 400)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}")
    return error_response(exc.detail, exc.status_code)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return error_response("Internal Server Error", 500)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error responder to the application."""
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
