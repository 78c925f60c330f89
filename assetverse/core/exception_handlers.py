"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Every error response has the
shape ``{error, code, statusCode}`` plus ``details`` when there is context.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from assetverse.domain.exceptions import AssetverseException
from assetverse.shared.logging import get_logger

logger = get_logger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "OUT_OF_STOCK": 400,
    "INVALID_STATE": 400,
    "NOT_AFFILIATED": 400,
    "PAYMENT_NOT_COMPLETED": 400,
    "UNAUTHORIZED": 401,
    "FORBIDDEN": 403,
    "PACKAGE_LIMIT": 403,
    "NOT_FOUND": 404,
    "DUPLICATE_REQUEST": 409,
    "ALREADY_ASSIGNED": 409,
    "ALREADY_UPGRADED": 409,
    "USER_EXISTS": 409,
    "COMPANY_EXISTS": 409,
    "ASSET_IN_USE": 409,
    "CONFLICT": 409,
    "PAYMENT_ALREADY_RECORDED": 409,
    "PAYMENT_PROVIDER_ERROR": 502,
    "PAYMENT_PROVIDER_UNAVAILABLE": 503,
}

# Code for framework HTTP errors that do not come from a domain exception.
_HTTP_STATUS_CODE: dict[int, str] = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    429: "RATE_LIMITED",
}


def error_body(
    message: str, code: str, status: int, details: Any = None
) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message, "code": code, "statusCode": status}
    if details:
        body["details"] = details
    return body


def status_for(error_code: str) -> int:
    return _ERROR_CODE_STATUS.get(error_code, 400)


def _assetverse_exception_handler(
    request: Request, exc: AssetverseException
) -> JSONResponse:
    status = status_for(exc.error_code)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status,
        content=error_body(exc.message, exc.error_code, status, exc.details),
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with the pydantic error list in details."""
    return JSONResponse(
        status_code=400,
        content=error_body(
            "Request validation failed",
            "VALIDATION_ERROR",
            400,
            jsonable_encoder(exc.errors(), exclude={"ctx"}),
        ),
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = _HTTP_STATUS_CODE.get(exc.status_code, "HTTP_ERROR")
    message = "Not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, code, exc.status_code),
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    response = JSONResponse(
        status_code=429,
        content=error_body(f"Rate limit exceeded: {exc.detail}", "RATE_LIMITED", 429),
    )
    limiter = getattr(request.app.state, "limiter", None)
    view_limit = getattr(request.state, "view_rate_limit", None)
    if limiter is not None and view_limit is not None:
        response = limiter._inject_headers(response, view_limit)
    return response


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500 with the underlying message."""
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content=error_body(str(exc) or "Internal server error", "INTERNAL_ERROR", 500),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: AssetverseException (and subclasses), RequestValidationError,
    StarletteHTTPException, RateLimitExceeded, generic Exception.
    """
    app.add_exception_handler(AssetverseException, _assetverse_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
