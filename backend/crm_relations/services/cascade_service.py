"""
Cascade service: hard deletes of contacts, companies and deals.

Dependent areas of activity and synergies are removed by the foreign keys
(ON DELETE CASCADE), and the denormalized primary pointers are nulled by
ON DELETE SET NULL. The service only counts what will go, issues the single
delete and reports.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.core.exceptions import NotFoundError
from crm_relations.core.logging import get_logger
from crm_relations.services.base_service import BaseService
from crm_relations.db.repositories.area_of_activity_repository import AreaOfActivityRepository
from crm_relations.db.repositories.synergy_repository import SynergyRepository
from crm_relations.db.repositories.contact_repository import ContactRepository
from crm_relations.db.repositories.company_repository import CompanyRepository
from crm_relations.db.repositories.deal_repository import DealRepository
from crm_relations.schemas.cascade import CascadeReport

logger = get_logger(__name__)


class CascadeService(BaseService):
    """Service for deletes that cascade into associations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.area_repo = AreaOfActivityRepository(session)
        self.synergy_repo = SynergyRepository(session)
        self.contact_repo = ContactRepository(session)
        self.company_repo = CompanyRepository(session)
        self.deal_repo = DealRepository(session)

    async def delete_contact(self, contact_id: int) -> CascadeReport:
        """Delete a contact with its areas of activity and synergies."""
        if not await self.contact_repo.exists(contact_id):
            raise NotFoundError("Contact", contact_id)

        report = CascadeReport(
            entity="Contact",
            id=contact_id,
            areas_removed=await self.area_repo.count(contact_id=contact_id),
            synergies_removed=await self.synergy_repo.count(contact_id=contact_id),
        )
        async with self._unit_of_work("delete_contact"):
            await self.contact_repo.delete(contact_id)
        self._log(report)
        return report

    async def delete_company(self, company_id: int) -> CascadeReport:
        """Delete a company with its areas of activity and synergies."""
        if not await self.company_repo.exists(company_id):
            raise NotFoundError("Company", company_id)

        report = CascadeReport(
            entity="Company",
            id=company_id,
            areas_removed=await self.area_repo.count(company_id=company_id),
            synergies_removed=await self.synergy_repo.count(company_id=company_id),
        )
        async with self._unit_of_work("delete_company"):
            await self.company_repo.delete(company_id)
        self._log(report)
        return report

    async def delete_deal(self, deal_id: int) -> CascadeReport:
        """Delete a deal with its synergies."""
        if not await self.deal_repo.exists(deal_id):
            raise NotFoundError("Deal", deal_id)

        report = CascadeReport(
            entity="Deal",
            id=deal_id,
            synergies_removed=await self.synergy_repo.count(deal_id=deal_id),
        )
        async with self._unit_of_work("delete_deal"):
            await self.deal_repo.delete(deal_id)
        self._log(report)
        return report

    def _log(self, report: CascadeReport) -> None:
        logger.info(
            f"{report.entity} deleted",
            extra=report.model_dump(),
        )
