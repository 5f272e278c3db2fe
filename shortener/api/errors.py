"""
Exception Handlers

Translate service exceptions into HTTP responses. Internal detail is logged
here and never copied into the response body.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shortener.core.exceptions import (
    GenerationExhaustedError,
    InvalidURLError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)

BAD_BODY_MESSAGE = 'Request body must be JSON with a string "url" field'
STORE_WRITE_FAILED_MESSAGE = "Failed to store URL mapping"
STORE_READ_FAILED_MESSAGE = "Failed to query URL mapping"
EXHAUSTED_MESSAGE = "Failed to generate a unique short URL"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def invalid_url_handler(request: Request, exc: InvalidURLError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, exc.reason)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return _error(status.HTTP_400_BAD_REQUEST, BAD_BODY_MESSAGE)


async def generation_exhausted_handler(
    request: Request, exc: GenerationExhaustedError
) -> JSONResponse:
    logger.error(str(exc))
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, EXHAUSTED_MESSAGE)


async def store_unavailable_handler(
    request: Request, exc: StoreUnavailableError
) -> JSONResponse:
    logger.error(
        f"{request.method} {request.url.path} failed: {exc}",
        exc_info=exc.original_error or exc
    )
    if request.method == "POST":
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, STORE_WRITE_FAILED_MESSAGE)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, STORE_READ_FAILED_MESSAGE)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}", exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidURLError, invalid_url_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(GenerationExhaustedError, generation_exhausted_handler)
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
