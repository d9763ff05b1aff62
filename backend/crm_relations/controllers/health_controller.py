"""
Health controller.
Coordinates health service to return health status.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.controllers.base_controller import BaseController
from crm_relations.schemas.health import HealthResponse
from crm_relations.services.health_service import HealthService


class HealthController(BaseController):
    """Controller for health check operations."""

    def __init__(self, health_service: HealthService = None):
        self.health_service = health_service or HealthService()

    async def get_health(self, session: AsyncSession) -> HealthResponse:
        """
        Get system health status.

        Returns:
            HealthResponse with status, uptime, and checks
        """
        return await self.health_service.get_health(session)
