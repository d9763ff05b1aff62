"""
Association service: direct CRUD of the contact <-> company area of activity.

Deliberately low level. Creating or deleting an area never touches
Contact.primary_company_id or Company.primary_contact_id; the consistency
coordinator sequences those follow-up steps.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.core.exceptions import ConflictError, NotFoundError, ValidationError
from crm_relations.core.logging import get_logger
from crm_relations.services.base_service import BaseService
from crm_relations.db.repositories.area_of_activity_repository import AreaOfActivityRepository
from crm_relations.db.repositories.contact_repository import ContactRepository
from crm_relations.db.repositories.company_repository import CompanyRepository
from crm_relations.schemas.area_of_activity import AreaOfActivityUpdate, AreaOfActivityResponse
from crm_relations.schemas.company import CompanyResponse
from crm_relations.schemas.contact import ContactResponse

logger = get_logger(__name__)


class AssociationService(BaseService):
    """Service for area of activity operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.area_repo = AreaOfActivityRepository(session)
        self.contact_repo = ContactRepository(session)
        self.company_repo = CompanyRepository(session)

    async def create_area(
        self,
        contact_id: int,
        company_id: int,
        role: Optional[str] = None,
        job_description: Optional[str] = None,
        is_primary: bool = False,
    ) -> AreaOfActivityResponse:
        """
        Link a contact to a company.

        With ``is_primary`` the contact's other areas are demoted in the same
        commit, so the contact never holds two primary areas.

        Raises:
            ValidationError: an identifier is missing
            NotFoundError: the contact or company does not exist
            ConflictError: the contact is already linked to the company
        """
        if contact_id is None:
            raise ValidationError("contact_id is required to create an area of activity")
        if company_id is None:
            raise ValidationError("company_id is required to create an area of activity")
        if not await self.contact_repo.exists(contact_id):
            raise NotFoundError("Contact", contact_id)
        if not await self.company_repo.exists(company_id):
            raise NotFoundError("Company", company_id)

        existing = await self.area_repo.get_by_contact_and_company(contact_id, company_id)
        if existing:
            raise ConflictError(
                f"Contact {contact_id} is already linked to company {company_id}",
                {"area_id": existing.id, "contact_id": contact_id, "company_id": company_id},
            )

        async with self._unit_of_work("create_area"):
            if is_primary:
                await self.area_repo.clear_primary(contact_id)
            area = await self.area_repo.create(
                contact_id=contact_id,
                company_id=company_id,
                role=role,
                job_description=job_description,
                is_primary=is_primary,
            )

        logger.info(
            "Area of activity created",
            extra={"area_id": area.id, "contact_id": contact_id, "company_id": company_id, "is_primary": is_primary},
        )
        return AreaOfActivityResponse.model_validate(area)

    async def get_area(self, area_id: int) -> AreaOfActivityResponse:
        """Get area of activity by ID."""
        area = await self.area_repo.get(area_id)
        if not area:
            raise NotFoundError("AreaOfActivity", area_id)
        return AreaOfActivityResponse.model_validate(area)

    async def update_area(self, area_id: int, patch: AreaOfActivityUpdate) -> AreaOfActivityResponse:
        """
        Patch an area of activity.

        A patch setting ``is_primary`` demotes the contact's other areas in the
        same commit. A ``version`` in the patch turns on the stale-write check.
        """
        area = await self.area_repo.get(area_id)
        if not area:
            raise NotFoundError("AreaOfActivity", area_id)

        update_dict = patch.model_dump(exclude_unset=True)
        expected_version = update_dict.pop("version", None)
        if update_dict.get("is_primary") is None:
            update_dict.pop("is_primary", None)
        if not update_dict and expected_version is None:
            return AreaOfActivityResponse.model_validate(area)

        contact_id = area.contact_id
        async with self._unit_of_work("update_area"):
            if update_dict.get("is_primary"):
                await self.area_repo.clear_primary(contact_id, except_area_id=area_id)
            updated = await self.area_repo.update(area_id, expected_version=expected_version, **update_dict)
            if updated is None:
                raise ConflictError(
                    f"Area of activity {area_id} was modified by another request",
                    {"entity": "AreaOfActivity", "id": area_id, "expected_version": expected_version},
                )

        logger.info("Area of activity updated", extra={"area_id": area_id, "fields": sorted(update_dict)})
        return AreaOfActivityResponse.model_validate(updated)

    async def delete_area(self, area_id: int) -> None:
        """Delete an area of activity. Primary pointers on contact and company are left alone."""
        async with self._unit_of_work("delete_area"):
            deleted = await self.area_repo.delete(area_id)
            if not deleted:
                raise NotFoundError("AreaOfActivity", area_id)
        logger.info("Area of activity deleted", extra={"area_id": area_id})

    async def list_by_contact(self, contact_id: int) -> List[AreaOfActivityResponse]:
        """List a contact's areas of activity."""
        if not await self.contact_repo.exists(contact_id):
            raise NotFoundError("Contact", contact_id)
        areas = await self.area_repo.list_by_contact(contact_id)
        return [AreaOfActivityResponse.model_validate(area) for area in areas]

    async def list_by_company(self, company_id: int) -> List[AreaOfActivityResponse]:
        """List the areas of activity held at a company."""
        if not await self.company_repo.exists(company_id):
            raise NotFoundError("Company", company_id)
        areas = await self.area_repo.list_by_company(company_id)
        return [AreaOfActivityResponse.model_validate(area) for area in areas]

    async def list_companies_for_contact(self, contact_id: int) -> List[CompanyResponse]:
        """List the companies a contact works at, primary company first."""
        if not await self.contact_repo.exists(contact_id):
            raise NotFoundError("Contact", contact_id)
        companies = await self.company_repo.list_by_contact(contact_id)
        return [CompanyResponse.model_validate(company) for company in companies]

    async def list_contacts_for_company(self, company_id: int) -> List[ContactResponse]:
        """List the contacts working at a company."""
        if not await self.company_repo.exists(company_id):
            raise NotFoundError("Company", company_id)
        contacts = await self.contact_repo.list_by_company(company_id)
        return [ContactResponse.model_validate(contact) for contact in contacts]
