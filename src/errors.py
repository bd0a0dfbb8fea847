"""Application error types and the error-to-response mapper."""

import logging
from enum import StrEnum

import pydantic
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import get_settings

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


class ErrorCode(StrEnum):
    """Machine-readable error codes returned to clients."""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: str = ErrorCode.INTERNAL_ERROR,
        is_operational: bool = True,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.is_operational = is_operational


class BadRequestError(AppError):
    def __init__(self, message: str = "Bad request", code: str = ErrorCode.BAD_REQUEST) -> None:
        super().__init__(message, 400, code)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Unauthorized", code: str = ErrorCode.UNAUTHORIZED) -> None:
        super().__init__(message, 401, code)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Forbidden", code: str = ErrorCode.FORBIDDEN) -> None:
        super().__init__(message, 403, code)


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found", code: str = ErrorCode.NOT_FOUND) -> None:
        super().__init__(message, 404, code)


class ConflictError(AppError):
    def __init__(self, message: str = "Conflict", code: str = ErrorCode.CONFLICT) -> None:
        super().__init__(message, 409, code)


class ValidationError(AppError):
    """Schema validation failure carrying per-field messages."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: dict[str, list[str]] | None = None,
        code: str = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        super().__init__(message, 422, code)
        self.errors = errors or {}


class DatabaseError(AppError):
    def __init__(self, message: str = "Database error", code: str = ErrorCode.DATABASE_ERROR) -> None:
        super().__init__(message, 500, code)


class ExternalServiceError(AppError):
    def __init__(
        self,
        message: str = "External service error",
        code: str = ErrorCode.EXTERNAL_SERVICE_ERROR,
    ) -> None:
        super().__init__(message, 503, code)


def format_validation_errors(error: pydantic.ValidationError) -> dict[str, list[str]]:
    """Group pydantic issues by dotted field path."""
    formatted: dict[str, list[str]] = {}
    for issue in error.errors():
        path = ".".join(str(part) for part in issue["loc"]) or "unknown"
        formatted.setdefault(path, []).append(issue["msg"])
    return formatted


def handle_route_error(error: Exception) -> JSONResponse:
    """Convert any exception raised while serving a request into a JSON error response."""
    if isinstance(error, AppError):
        level = logging.ERROR if error.status_code >= 500 else logging.WARNING
        logger.log(level, f"[{error.code}] {error.message}", exc_info=not error.is_operational)
        message = error.message
        if not error.is_operational and get_settings().is_production:
            message = GENERIC_ERROR_MESSAGE
        body = {"success": False, "message": message, "code": str(error.code)}
        if isinstance(error, ValidationError):
            body["errors"] = error.errors
        return JSONResponse(body, status_code=error.status_code)

    if isinstance(error, pydantic.ValidationError):
        errors = format_validation_errors(error)
        logger.error("Validation error", extra={"errors": errors})
        return JSONResponse(
            {
                "success": False,
                "message": "Validation failed",
                "code": str(ErrorCode.VALIDATION_ERROR),
                "errors": errors,
            },
            status_code=422,
        )

    logger.error(f"Unexpected error: {error}", exc_info=error)
    message = GENERIC_ERROR_MESSAGE if get_settings().is_production else str(error)
    return JSONResponse(
        {
            "success": False,
            "message": message or GENERIC_ERROR_MESSAGE,
            "code": str(ErrorCode.INTERNAL_ERROR),
        },
        status_code=500,
    )


def method_not_allowed(method: str) -> JSONResponse:
    return JSONResponse({"error": f"Method {method} Not Allowed"}, status_code=405)


def register_exception_handlers(app: FastAPI) -> None:
    """Route framework-level errors through the same response shapes."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return handle_route_error(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 405:
            return method_not_allowed(request.method)
        return JSONResponse(
            {"success": False, "message": str(exc.detail), "code": _code_for_status(exc.status_code)},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )


def _code_for_status(status_code: int) -> str:
    return {
        400: ErrorCode.BAD_REQUEST,
        401: ErrorCode.UNAUTHORIZED,
        403: ErrorCode.FORBIDDEN,
        404: ErrorCode.NOT_FOUND,
        409: ErrorCode.CONFLICT,
        422: ErrorCode.VALIDATION_ERROR,
    }.get(status_code, ErrorCode.INTERNAL_ERROR).value
