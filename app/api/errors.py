# File: app/api/errors.py

"""
Exception handlers shared by every route.

All failures answer with the same body, {"error": <message>}. The status
is 500 unless the app was configured with distinct_error_status.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import UserServiceError

logger = logging.getLogger("users.errors")


def _error_response(request: Request, message: str, semantic_status: int) -> JSONResponse:
    if request.app.state.settings.distinct_error_status:
        status_code = semantic_status
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=status_code, content={"error": message})


async def user_service_error_handler(request: Request, exc: UserServiceError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
    return _error_response(request, exc.message, exc.status_code)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    detail = errors[0].get("msg", "invalid value") if errors else "invalid value"
    message = f"Invalid request body: {detail}"
    logger.warning(f"{request.method} {request.url.path} failed: {message}")
    return _error_response(request, message, status.HTTP_400_BAD_REQUEST)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} crashed: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserServiceError, user_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
