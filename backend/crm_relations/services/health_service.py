"""
Health service.
Provides health check functionality.
"""

import time
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.core.config import settings
from crm_relations.core.logging import get_logger
from crm_relations.services.base_service import BaseService
from crm_relations.db.repositories.health_repository import HealthRepository
from crm_relations.schemas.health import HealthResponse

logger = get_logger(__name__)


class HealthService(BaseService):
    """Service for health check operations."""

    def __init__(self):
        self.start_time = time.time()

    async def get_health(self, session: AsyncSession) -> HealthResponse:
        """
        Get system health status.

        Returns:
            HealthResponse with status, uptime, and checks
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration format

        checks = {}
        repo = HealthRepository(session=session)
        db_ok = await repo.check_database()
        checks["database"] = "ok" if db_ok else "error"

        if db_ok:
            try:
                checks["relationships"] = await repo.relationship_counts()
            except SQLAlchemyError as e:
                logger.warning("Relationship tables unavailable", extra={"error": str(e)})
                checks["relationships"] = "error"

        status = "ok" if all(check != "error" for check in checks.values()) else "degraded"

        return HealthResponse(
            status=status,
            version=settings.VERSION,
            uptime=uptime_str,
            checks=checks,
        )
