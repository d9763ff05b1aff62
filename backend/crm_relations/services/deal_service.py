"""
Deal service.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.core.exceptions import NotFoundError
from crm_relations.services.base_service import BaseService
from crm_relations.db.repositories.deal_repository import DealRepository
from crm_relations.db.repositories.company_repository import CompanyRepository
from crm_relations.schemas.deal import DealCreate, DealResponse


class DealService(BaseService):
    """Service for deal operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.deal_repo = DealRepository(session)
        self.company_repo = CompanyRepository(session)

    async def create_deal(self, deal_data: DealCreate) -> DealResponse:
        """Create a new deal, optionally owned by a company."""
        if deal_data.company_id is not None and not await self.company_repo.exists(deal_data.company_id):
            raise NotFoundError("Company", deal_data.company_id)

        async with self._unit_of_work("create_deal"):
            deal = await self.deal_repo.create(**deal_data.model_dump())
        return DealResponse.model_validate(deal)

    async def get_deal(self, deal_id: int) -> DealResponse:
        """Get deal by ID."""
        deal = await self.deal_repo.get(deal_id)
        if not deal:
            raise NotFoundError("Deal", deal_id)
        return DealResponse.model_validate(deal)
