"""
Contact controller.
"""

from typing import List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.controllers.base_controller import BaseController
from crm_relations.services.contact_service import ContactService
from crm_relations.services.association_service import AssociationService
from crm_relations.services.synergy_service import SynergyService
from crm_relations.services.cascade_service import CascadeService
from crm_relations.services.consistency_coordinator import ConsistencyCoordinator
from crm_relations.schemas.contact import ContactCreate, ContactUpdate, ContactResponse, ContactListResponse
from crm_relations.schemas.area_of_activity import AreaOfActivityCreate, AreaOfActivityResponse, CompanyLinkCreate
from crm_relations.schemas.company import CompanyResponse
from crm_relations.schemas.synergy import SynergyResponse
from crm_relations.schemas.cascade import CascadeReport


class ContactController(BaseController):
    """Controller for contact operations."""

    def __init__(self, session: AsyncSession):
        self.contact_service = ContactService(session)
        self.association_service = AssociationService(session)
        self.synergy_service = SynergyService(session)
        self.cascade_service = CascadeService(session)
        self.coordinator = ConsistencyCoordinator(session)

    async def create_contact(self, contact_data: ContactCreate) -> ContactResponse:
        """Create a new contact."""
        return await self.contact_service.create_contact(contact_data)

    async def get_contact(self, contact_id: int) -> ContactResponse:
        """Get contact by ID."""
        return await self.contact_service.get_contact(contact_id)

    async def list_contacts(
        self,
        skip: int = 0,
        limit: int = 100,
    ) -> ContactListResponse:
        """List all contacts with pagination."""
        contacts, total = await self.contact_service.list_contacts(
            skip=skip,
            limit=limit,
        )
        return ContactListResponse(items=contacts, total=total)

    async def update_contact(
        self,
        contact_id: int,
        contact_data: ContactUpdate,
    ) -> ContactResponse:
        """Update a contact."""
        return await self.contact_service.update_contact(contact_id, contact_data)

    async def delete_contact(self, contact_id: int) -> CascadeReport:
        """Delete a contact and everything that hangs off it."""
        return await self.cascade_service.delete_contact(contact_id)

    async def associate_company(
        self,
        contact_id: int,
        area_data: AreaOfActivityCreate,
    ) -> AreaOfActivityResponse:
        """Link the contact to a company through the association saga."""
        return await self.coordinator.associate_contact_to_company(
            contact_id=contact_id,
            company_id=area_data.company_id,
            role=area_data.role,
            is_primary=area_data.is_primary,
            job_description=area_data.job_description,
        )

    async def disassociate_company(self, contact_id: int, company_id: int) -> None:
        """Unlink the contact from a company through the disassociation saga."""
        await self.coordinator.disassociate_contact_from_company(contact_id, company_id)

    async def list_areas_of_activity(self, contact_id: int) -> List[AreaOfActivityResponse]:
        """List the contact's areas of activity."""
        return await self.association_service.list_by_contact(contact_id)

    async def list_synergies(self, contact_id: int) -> List[SynergyResponse]:
        """List the synergies the contact takes part in."""
        return await self.synergy_service.list_by_contact(contact_id)

    async def reconcile(self, contact_id: int) -> ContactResponse:
        """Resync the contact's primary company with its primary area."""
        return await self.coordinator.reconcile_contact(contact_id)

    async def link_company(
        self,
        contact_id: int,
        company_id: int,
        link_data: CompanyLinkCreate,
    ) -> Tuple[AreaOfActivityResponse, bool]:
        """Link the contact to a company if not linked yet; a first link becomes primary."""
        return await self.coordinator.link_contact_to_company(
            contact_id,
            company_id,
            role=link_data.role,
            job_description=link_data.job_description,
        )

    async def list_companies(self, contact_id: int) -> List[CompanyResponse]:
        """List the companies the contact works at."""
        return await self.association_service.list_companies_for_contact(contact_id)
