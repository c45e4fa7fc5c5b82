"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps workflow exceptions to
HTTP responses by their error_class; denials expose the reason code only.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import RfpFlowException

logger = logging.getLogger(__name__)

_ERROR_CLASS_STATUS: dict[str, int] = {
    "bad_request": 400,
    "forbidden": 403,
    "not_found": 404,
    "conflict": 409,
    "retryable": 503,
}

RETRY_AFTER_SECONDS = 1


def _rfpflow_exception_handler(
    request: Request, exc: RfpFlowException
) -> JSONResponse:
    """Return JSON from RfpFlowException.to_dict() with the class's status code."""
    status = _ERROR_CLASS_STATUS.get(exc.error_class, 400)
    log = logger.warning if exc.retryable else logger.info
    log("%s %s -> %d %s", request.method, request.url.path, status, exc.error_code)
    headers = {"Retry-After": str(RETRY_AFTER_SECONDS)} if exc.retryable else None
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: RfpFlowException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(RfpFlowException, _rfpflow_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
