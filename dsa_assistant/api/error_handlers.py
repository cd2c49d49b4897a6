"""
Exception handlers.

Map domain exceptions to HTTP responses with an ErrorResponse body.

Dependencies: fastapi, dsa_assistant.core.exceptions, dsa_assistant.models.common
System role: Uniform HTTP error rendering
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from dsa_assistant.core.exceptions import (
    AssistantError,
    ContentNotFoundError,
    InternalInconsistencyError,
    InvalidArgumentError,
    ProviderUnavailableError,
    RateLimitExceededError,
)
from dsa_assistant.models.common import ErrorResponse

logger = logging.getLogger(__name__)

PROVIDER_UNAVAILABLE_MESSAGE = "AI service temporarily unavailable. Please try again later."


def _error_response(
    status_code: int,
    message: str,
    error_type: str,
    details: dict | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=message, error_type=error_type, details=details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    logger.warning(f"{__name__}:invalid_argument - {request.url.path}: {exc.message}")
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message, "invalid_argument", exc.details)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]
    logger.warning(f"{__name__}:request_validation - {request.url.path}: {errors}")
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "Request validation failed",
        "invalid_argument",
        {"errors": errors},
    )


async def not_found_handler(request: Request, exc: ContentNotFoundError) -> JSONResponse:
    logger.warning(f"{__name__}:not_found - {exc.message}")
    return _error_response(status.HTTP_404_NOT_FOUND, exc.message, "not_found", exc.details)


async def provider_unavailable_handler(
    request: Request,
    exc: ProviderUnavailableError,
) -> JSONResponse:
    logger.error(f"{__name__}:provider_unavailable - {request.url.path}: {exc}")
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        PROVIDER_UNAVAILABLE_MESSAGE,
        "provider_unavailable",
        {"provider": exc.details.get("provider")} if exc.details.get("provider") else None,
    )


async def rate_limit_handler(request: Request, exc: RateLimitExceededError) -> JSONResponse:
    logger.warning(f"{__name__}:rate_limit - {request.url.path}: retry after {exc.retry_after_seconds}s")
    headers = {
        "X-RateLimit-Limit": str(exc.limit),
        "X-RateLimit-Remaining": "0",
        "X-RateLimit-Reset": str(exc.retry_after_seconds),
        "Retry-After": str(exc.retry_after_seconds),
    }
    return _error_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        exc.message,
        "rate_limited",
        exc.details,
        headers=headers,
    )


async def internal_error_handler(request: Request, exc: AssistantError) -> JSONResponse:
    logger.error(f"{__name__}:internal_error - {request.url.path}: {exc}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal error while processing the request",
        "internal_error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register domain exception handlers on the application.

    Starlette resolves handlers along the exception's MRO, so the most
    specific registration wins and AssistantError catches the rest.
    """
    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ContentNotFoundError, not_found_handler)
    app.add_exception_handler(ProviderUnavailableError, provider_unavailable_handler)
    app.add_exception_handler(RateLimitExceededError, rate_limit_handler)
    app.add_exception_handler(InternalInconsistencyError, internal_error_handler)
    app.add_exception_handler(AssistantError, internal_error_handler)
