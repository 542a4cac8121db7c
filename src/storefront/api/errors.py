"""Exception handlers translating domain errors into JSON responses.

Every error body carries a human-readable ``message``; validation failures
add the per-field ``errors`` mapping.
"""

import os

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.errors import AuthenticationError, StorefrontError

logger = structlog.get_logger(__name__)

GENERIC_SERVER_ERROR = "An unexpected error occurred"


def _flatten(messages) -> str:
    parts = []
    for field, errors in (messages or {}).items():
        for error in errors if isinstance(errors, list | tuple) else [errors]:
            parts.append(f"{field}: {error}")
    return "; ".join(parts) or "Invalid request"


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": _flatten(exc.messages), "errors": exc.messages},
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {}
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "body"
        errors.setdefault(location, []).append(error.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content={"message": _flatten(errors), "errors": errors})


async def handle_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": "User not found"})


async def handle_storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message}, headers=headers)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = "Route not found" if exc.status_code == 404 else exc.detail
    return JSONResponse(status_code=exc.status_code, content={"message": message}, headers=exc.headers)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", method=request.method, path=request.url.path)
    detail = GENERIC_SERVER_ERROR if os.environ.get("PROTEAN_ENV") == "production" else str(exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error", "error": detail})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, handle_not_found)
    app.add_exception_handler(StorefrontError, handle_storefront_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
