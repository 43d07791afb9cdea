from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sql_chatbot.errors import ServiceError
from sql_chatbot.models.responses import ErrorResponse

logger = structlog.get_logger()


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=str(exc))
    else:
        logger.info("request_rejected", path=request.url.path, error=str(exc))
    return error_response(exc.status_code, exc.message, exc.details)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("request_body_invalid", path=request.url.path)
    errors = exc.errors()
    details = errors[0].get("msg") if errors else None
    return error_response(400, "Invalid request body", details)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request_crashed", path=request.url.path, error=str(exc))
    return error_response(500, "Internal server error", str(exc) or type(exc).__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
