"""
Company controller.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.controllers.base_controller import BaseController
from crm_relations.services.company_service import CompanyService
from crm_relations.services.association_service import AssociationService
from crm_relations.services.primary_designation_service import PrimaryDesignationService
from crm_relations.services.synergy_service import SynergyService
from crm_relations.services.cascade_service import CascadeService
from crm_relations.services.consistency_coordinator import ConsistencyCoordinator
from crm_relations.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
    CompanyListResponse,
    PrimaryContactUpdate,
)
from crm_relations.schemas.area_of_activity import AreaOfActivityResponse
from crm_relations.schemas.synergy import SynergyResponse
from crm_relations.schemas.cascade import CascadeReport
from crm_relations.schemas.contact import CompanyContactCreate, ContactCreate, ContactResponse


class CompanyController(BaseController):
    """Controller for company operations."""

    def __init__(self, session: AsyncSession):
        self.company_service = CompanyService(session)
        self.association_service = AssociationService(session)
        self.designation_service = PrimaryDesignationService(session)
        self.synergy_service = SynergyService(session)
        self.cascade_service = CascadeService(session)
        self.coordinator = ConsistencyCoordinator(session)

    async def create_company(self, company_data: CompanyCreate) -> CompanyResponse:
        """Create a new company."""
        return await self.company_service.create_company(company_data)

    async def get_company(self, company_id: int) -> CompanyResponse:
        """Get company by ID."""
        return await self.company_service.get_company(company_id)

    async def list_companies(self, skip: int = 0, limit: int = 100) -> CompanyListResponse:
        """List companies with pagination."""
        companies, total = await self.company_service.list_companies(skip=skip, limit=limit)
        return CompanyListResponse(items=companies, total=total)

    async def update_company(self, company_id: int, company_data: CompanyUpdate) -> CompanyResponse:
        """Update a company."""
        return await self.company_service.update_company(company_id, company_data)

    async def set_primary_contact(self, company_id: int, data: PrimaryContactUpdate) -> CompanyResponse:
        """Set or clear the company's primary contact."""
        return await self.designation_service.set_company_primary_contact(
            company_id,
            data.primary_contact_id,
            expected_version=data.version,
        )

    async def delete_company(self, company_id: int) -> CascadeReport:
        """Delete a company and its associations."""
        return await self.cascade_service.delete_company(company_id)

    async def list_areas_of_activity(self, company_id: int) -> List[AreaOfActivityResponse]:
        """List the areas of activity held at the company."""
        return await self.association_service.list_by_company(company_id)

    async def list_synergies(self, company_id: int) -> List[SynergyResponse]:
        """List the company's synergies."""
        return await self.synergy_service.list_by_company(company_id)

    async def create_contact(self, company_id: int, contact_data: CompanyContactCreate) -> ContactResponse:
        """Create a contact working at the company, with the company as primary."""
        return await self.coordinator.create_contact_for_company(
            company_id,
            ContactCreate(**contact_data.model_dump(exclude={"role", "job_description"})),
            role=contact_data.role,
            job_description=contact_data.job_description,
        )

    async def list_contacts(self, company_id: int) -> List[ContactResponse]:
        """List the contacts working at the company."""
        return await self.association_service.list_contacts_for_company(company_id)
