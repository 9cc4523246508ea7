"""Exception handlers: turn every failure into the standard error envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tenantauth.core.errors import ServiceError

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Internal server error"


def error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": kind, "message": message},
    )


async def handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "%s on %s %s", exc.kind, request.method, request.url.path, exc_info=exc
        )
        return error_response(exc.status_code, exc.kind, GENERIC_MESSAGE)
    return error_response(exc.status_code, exc.kind, exc.message)


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = sorted({
        str(err["loc"][-1]) for err in exc.errors() if err.get("loc")
    })
    message = "Invalid request"
    if fields:
        message = f"Invalid or missing fields: {', '.join(fields)}"
    return error_response(status.HTTP_400_BAD_REQUEST, "validation_error", message)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", GENERIC_MESSAGE
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, handle_service_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected)
