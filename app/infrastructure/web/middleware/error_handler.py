"""
Global error handling for the FastAPI application.
Maps domain exceptions to HTTP statuses and formats unexpected failures.
"""

import logging
import traceback
from typing import Any, Dict

from fastapi import FastAPI, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.config import get_settings
from app.domain.models.base import (
    DomainException,
    ValidationError,
    AuthenticationError,
    LicenseSuspendedError,
    EntityNotFoundError,
    DuplicateEntityError,
    BusinessRuleViolation,
    InvalidTransitionError,
    TenantSequenceMissingError,
    InvoiceImmutableError,
)

logger = logging.getLogger(__name__)


STATUS_BY_EXCEPTION = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    LicenseSuspendedError: status.HTTP_403_FORBIDDEN,
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateEntityError: status.HTTP_409_CONFLICT,
    BusinessRuleViolation: status.HTTP_409_CONFLICT,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    TenantSequenceMissingError: status.HTTP_412_PRECONDITION_FAILED,
    InvoiceImmutableError: status.HTTP_423_LOCKED,
}


def status_for(exc: DomainException) -> int:
    for exc_type in type(exc).__mro__:
        if exc_type in STATUS_BY_EXCEPTION:
            return STATUS_BY_EXCEPTION[exc_type]
    return status.HTTP_400_BAD_REQUEST


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Render a domain exception as {"error": code, "message": text}."""
    status_code = status_for(exc)
    logger.info(
        "%s %s -> %s %s: %s",
        request.method, request.url.path, status_code, exc.code, exc.message
    )
    content: Dict[str, Any] = {"error": exc.code, "message": exc.message}
    field = getattr(exc, "field", None)
    if isinstance(exc, ValidationError) and field:
        content["details"] = {"field": field}

    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception: %s: %s", type(exc).__name__, exc,
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response: Dict[str, Any] = {
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
        }

        if get_settings().debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response
        )
