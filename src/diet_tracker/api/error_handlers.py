"""Translate application errors into JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from diet_tracker.errors import AppError

_logger = logging.getLogger(__name__)


def error_response(
    message: str, status_code: int, details: dict[str, object] | None = None
) -> JSONResponse:
    body: dict[str, object] = {"message": message, "status_code": status_code}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content={"error": body})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    _logger.warning(
        "Application error: %s [%s %s]",
        exc.message,
        request.method,
        request.url.path,
    )
    return error_response(exc.message, exc.status_code, exc.details)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed request bodies and params with 400."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    _logger.warning(
        "Request validation failed: %s errors [%s %s]",
        len(errors),
        request.method,
        request.url.path,
    )
    return error_response(
        "Request validation failed",
        status.HTTP_400_BAD_REQUEST,
        {"errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    _logger.exception(
        "Unhandled error [%s %s]", request.method, request.url.path, exc_info=exc
    )
    return error_response("Server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
