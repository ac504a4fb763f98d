"""Translate service errors into structured HTTP error bodies."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import ErrorKind, ServiceError
from app.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    ErrorKind.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "Resource Not Found"),
    ErrorKind.CONFLICT: (status.HTTP_409_CONFLICT, "Conflict"),
    ErrorKind.ALREADY_EXISTS: (status.HTTP_409_CONFLICT, "User Already Exists"),
    ErrorKind.VALIDATION: (status.HTTP_400_BAD_REQUEST, "Validation Error"),
    ErrorKind.AUTHENTICATION_FAILED: (status.HTTP_401_UNAUTHORIZED, "Authentication Failed"),
    ErrorKind.NOT_AUTHENTICATED: (status.HTTP_401_UNAUTHORIZED, "Authentication Error"),
    ErrorKind.INTERNAL: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
}

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(status=status_code, error=error, message=message)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code, label = ERROR_RESPONSES[exc.kind]
    if exc.kind is ErrorKind.INTERNAL:
        logger.error(f"Internal error on {request.url.path}: {exc.message}")
        return error_response(status_code, label, GENERIC_ERROR_MESSAGE)
    logger.warning(f"{label}: {exc.message}")
    return error_response(status_code, label, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    message = "; ".join(messages) or "Invalid request"
    logger.warning(f"Validation error on {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation Error", message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error on {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
