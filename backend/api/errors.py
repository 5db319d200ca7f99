"""Error taxonomy and JSON error rendering.

Every failure leaves the service as ``{"success": false, "message": ...}``,
including failures on the binary download endpoints.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UnsupportedMediaType(InvalidRequest):
    default_message = "Only PDF files are allowed"


class Conflict(ApiError):
    # Duplicate passkeys are reported as a plain bad request.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Passkey already in use. Choose another."


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Incorrect passkey"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "File not found"


class Internal(ApiError):
    pass


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request on %s: %s", request.url.path, exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, "Malformed request")


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "%s on %s (500): %s", type(exc).__name__, request.url.path, exc, exc_info=exc
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, Internal.default_message)


def register_error_handlers(app: FastAPI) -> None:
    """Render every error as a ``success: false`` JSON body."""
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
