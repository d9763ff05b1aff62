"""
Deal controller.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.controllers.base_controller import BaseController
from crm_relations.services.deal_service import DealService
from crm_relations.services.synergy_service import SynergyService
from crm_relations.services.cascade_service import CascadeService
from crm_relations.schemas.deal import DealCreate, DealResponse
from crm_relations.schemas.synergy import DealSynergiesReplace, SynergyResponse
from crm_relations.schemas.cascade import CascadeReport


class DealController(BaseController):
    """Controller for deal operations."""

    def __init__(self, session: AsyncSession):
        self.deal_service = DealService(session)
        self.synergy_service = SynergyService(session)
        self.cascade_service = CascadeService(session)

    async def create_deal(self, deal_data: DealCreate) -> DealResponse:
        """Create a new deal."""
        return await self.deal_service.create_deal(deal_data)

    async def get_deal(self, deal_id: int) -> DealResponse:
        """Get deal by ID."""
        return await self.deal_service.get_deal(deal_id)

    async def delete_deal(self, deal_id: int) -> CascadeReport:
        """Delete a deal and its synergies."""
        return await self.cascade_service.delete_deal(deal_id)

    async def replace_synergies(self, deal_id: int, data: DealSynergiesReplace) -> List[SynergyResponse]:
        """Replace the deal's connector contacts."""
        return await self.synergy_service.replace_deal_synergies(
            deal_id,
            data.company_id,
            data.contact_ids,
        )

    async def list_synergies(self, deal_id: int) -> List[SynergyResponse]:
        """List the deal's synergies."""
        return await self.synergy_service.list_by_deal(deal_id)
