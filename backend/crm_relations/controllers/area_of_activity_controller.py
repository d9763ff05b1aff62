"""
Area of activity controller.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.controllers.base_controller import BaseController
from crm_relations.services.association_service import AssociationService
from crm_relations.services.consistency_coordinator import ConsistencyCoordinator
from crm_relations.schemas.area_of_activity import AreaOfActivityUpdate, AreaOfActivityResponse


class AreaOfActivityController(BaseController):
    """Controller for area of activity operations."""

    def __init__(self, session: AsyncSession):
        self.association_service = AssociationService(session)
        self.coordinator = ConsistencyCoordinator(session)

    async def get_area(self, area_id: int) -> AreaOfActivityResponse:
        """Get area of activity by ID."""
        return await self.association_service.get_area(area_id)

    async def update_area(self, area_id: int, patch: AreaOfActivityUpdate) -> AreaOfActivityResponse:
        """Patch an area of activity."""
        return await self.association_service.update_area(area_id, patch)

    async def delete_area(self, area_id: int) -> None:
        """Delete an area of activity."""
        await self.association_service.delete_area(area_id)

    async def set_primary(self, area_id: int) -> AreaOfActivityResponse:
        """Make the area its contact's primary one and sync the contact."""
        return await self.coordinator.promote_area(area_id)
