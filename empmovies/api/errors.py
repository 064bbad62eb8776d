# Centralized translation of exceptions into the JSON error body
# empmovies/api/errors.py

import logging
import traceback
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from empmovies.core.errors import AppError

logger = logging.getLogger(__name__)


def _format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flattens pydantic error entries into {location, field, message}."""
    details = []
    for err in errors:
        loc = list(err.get("loc", ()))
        location = loc[0] if loc and loc[0] in ("body", "query", "path", "header", "cookie") else "body"
        field_parts = loc[1:] if loc and loc[0] == location else loc
        details.append({
            "location": location,
            "field": ".".join(str(p) for p in field_parts),
            "message": err.get("msg", "Invalid value"),
        })
    return details


def error_response(
    request: Request,
    status_code: int,
    message: str,
    details: Optional[List[Any]] = None,
    exc: Optional[BaseException] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {"error": True, "status": status_code, "message": message}
    if details:
        body["details"] = details
    if exc is not None and not request.app.state.settings.is_production:
        body["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(request, exc.status_code, exc.message, exc.details, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Validation failed for {request.method} {request.url.path}: {exc.errors()}")
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        _format_validation_errors(exc.errors()),
        exc,
    )


async def model_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    # Models built inside handlers (form posts) raise pydantic's own error
    logger.warning(f"Validation failed for {request.method} {request.url.path}: {exc.errors()}")
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        _format_validation_errors(exc.errors()),
        exc,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # A known path with no handler for the method is still an unknown route
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        message = f"Route not found: {request.method} {request.url.path}"
        return error_response(request, status.HTTP_404_NOT_FOUND, message, exc=exc)
    return error_response(request, exc.status_code, str(exc.detail), exc=exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # ServerErrorMiddleware re-raises after this, so the server logs the traceback
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc) or "Internal Server Error",
        exc=exc,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, model_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
