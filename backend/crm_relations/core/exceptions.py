"""
Application exceptions and global exception handlers for the FastAPI application.
Serializes exceptions into structured logs and a uniform error envelope.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import Any, List, Optional

from crm_relations.core.integrations.observability import record_exception


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """A required identifier is missing, malformed or does not resolve."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, details)


class NotFoundError(AppException):
    """A referenced contact, company, area, deal or synergy does not exist."""
    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            f"{entity} {entity_id} not found",
            status.HTTP_404_NOT_FOUND,
            {"entity": entity, "id": entity_id},
        )


class ConflictError(AppException):
    """A write conflicts with current state (duplicate link, stale version, exclusivity rule)."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class FatalError(AppException):
    """Transport or storage failure. The current step is aborted without compensation."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE, details)


class PartialSagaFailure(AppException):
    """
    A later step of a multi-step mutation failed after earlier steps committed.

    Reported as a degraded success: the committed steps stay applied and the
    caller decides whether to retry the remaining ones.
    """
    def __init__(
        self,
        saga: str,
        completed_steps: List[str],
        failed_step: str,
        cause: Exception,
        entity: Optional[dict] = None,
        result: Any = None,
    ):
        self.saga = saga
        self.completed_steps = list(completed_steps)
        self.failed_step = failed_step
        self.cause = cause
        self.entity = entity or {}
        self.result = result
        cause_message = cause.message if isinstance(cause, AppException) else str(cause)
        super().__init__(
            f"{saga} partially applied: step '{failed_step}' failed after {self.completed_steps}",
            status.HTTP_207_MULTI_STATUS,
            {
                "saga": saga,
                "completed_steps": self.completed_steps,
                "failed_step": failed_step,
                "entity": self.entity,
                "cause": {
                    "type": type(cause).__name__,
                    "message": cause_message,
                    "details": cause.details if isinstance(cause, AppException) else None,
                },
                "result": result,
            },
        )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    if exc.status_code >= 500:
        record_exception(exc, request)

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "type": type(exc).__name__,
                "message": exc.message,
                "details": exc.details,
                "path": request.url.path,
            }
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.detail,
                "status_code": exc.status_code,
                "path": request.url.path,
            }
        },
    )


def _serialize_validation_errors(errors: list) -> list:
    """Convert validation errors to JSON-serializable format."""
    serialized = []
    for error in errors:
        serialized_error = {}
        for key, value in error.items():
            if key == "ctx" and isinstance(value, dict):
                # Context may hold exception instances
                serialized_error[key] = {
                    ctx_key: str(ctx_value) if isinstance(ctx_value, Exception) else ctx_value
                    for ctx_key, ctx_value in value.items()
                }
            elif isinstance(value, Exception):
                serialized_error[key] = str(value)
            else:
                serialized_error[key] = value
        serialized.append(serialized_error)
    return serialized


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    serialized_errors = _serialize_validation_errors(exc.errors())

    logger.warning(
        f"Validation error: {serialized_errors}",
        extra={
            "path": request.url.path,
            "errors": serialized_errors,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "message": "Validation error",
                "details": serialized_errors,
                "path": request.url.path,
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )

    record_exception(exc, request)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "message": "Internal server error",
                "path": request.url.path,
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
