"""
Observability hooks.
Startup announcement and exception recording for the relationship service.
"""

from fastapi import Request
import logging

from crm_relations.core.config import settings

logger = logging.getLogger(__name__)


def setup_observability() -> None:
    """
    Initialize observability for the service.

    Only log-based reporting is wired; exporters are configured by the
    deployment through the standard OTEL_* environment variables.
    """
    logger.info(
        "Setting up observability",
        extra={
            "service_name": settings.OTEL_SERVICE_NAME,
            "environment": settings.OTEL_ENVIRONMENT,
        },
    )


def record_exception(exc: Exception, request: Request) -> None:
    """
    Record an exception that reached the global handlers.

    Args:
        exc: The exception that occurred
        request: The FastAPI request object
    """
    logger.error(
        f"Exception recorded: {type(exc).__name__}",
        extra={
            "exception_message": str(exc),
            "path": request.url.path,
            "method": request.method,
        },
    )
