"""
Synergy controller.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.controllers.base_controller import BaseController
from crm_relations.services.synergy_service import SynergyService
from crm_relations.schemas.synergy import SynergyCreate, SynergyUpdate, SynergyResponse


class SynergyController(BaseController):
    """Controller for synergy operations."""

    def __init__(self, session: AsyncSession):
        self.synergy_service = SynergyService(session)

    async def create_synergy(self, synergy_data: SynergyCreate) -> SynergyResponse:
        """Create a synergy."""
        return await self.synergy_service.create_synergy(synergy_data)

    async def get_synergy(self, synergy_id: int) -> SynergyResponse:
        """Get synergy by ID."""
        return await self.synergy_service.get_synergy(synergy_id)

    async def update_synergy(self, synergy_id: int, synergy_data: SynergyUpdate) -> SynergyResponse:
        """Update a synergy."""
        return await self.synergy_service.update_synergy(synergy_id, synergy_data)

    async def delete_synergy(self, synergy_id: int) -> None:
        """Delete a synergy."""
        await self.synergy_service.delete_synergy(synergy_id)

    async def list_synergies(self, skip: int = 0, limit: int = 100) -> List[SynergyResponse]:
        """List all synergies."""
        return await self.synergy_service.list_synergies(skip=skip, limit=limit)
