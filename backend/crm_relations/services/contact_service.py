"""
Contact service with business logic.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.core.exceptions import ConflictError, NotFoundError
from crm_relations.core.logging import get_logger
from crm_relations.services.base_service import BaseService
from crm_relations.db.repositories.contact_repository import ContactRepository
from crm_relations.db.repositories.company_repository import CompanyRepository
from crm_relations.schemas.contact import ContactCreate, ContactUpdate, ContactResponse

logger = get_logger(__name__)


class ContactService(BaseService):
    """Service for contact operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.contact_repo = ContactRepository(session)
        self.company_repo = CompanyRepository(session)

    async def create_contact(self, contact_data: ContactCreate) -> ContactResponse:
        """Create a new contact."""
        async with self._unit_of_work("create_contact"):
            contact = await self.contact_repo.create(**contact_data.model_dump())
        logger.info("Contact created", extra={"contact_id": contact.id})
        return await self.get_contact(contact.id)

    async def get_contact(self, contact_id: int) -> ContactResponse:
        """Get contact by ID, with its areas of activity."""
        contact = await self.contact_repo.get(contact_id)
        if not contact:
            raise NotFoundError("Contact", contact_id)
        return self._to_response(contact)

    async def list_contacts(
        self,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[List[ContactResponse], int]:
        """List all contacts with pagination."""
        contacts = await self.contact_repo.list_all(skip, limit)
        total = await self.contact_repo.count()
        return [self._to_response(contact) for contact in contacts], total

    async def update_contact(
        self,
        contact_id: int,
        contact_data: ContactUpdate,
    ) -> ContactResponse:
        """Update a contact, including the denormalized primary company pointer."""
        contact = await self.contact_repo.get(contact_id)
        if not contact:
            raise NotFoundError("Contact", contact_id)

        update_dict = contact_data.model_dump(exclude_unset=True)
        expected_version = update_dict.pop("version", None)

        company_id = update_dict.get("primary_company_id")
        if company_id is not None and not await self.company_repo.exists(company_id):
            raise NotFoundError("Company", company_id)

        if not update_dict and expected_version is None:
            return self._to_response(contact)

        async with self._unit_of_work("update_contact"):
            updated = await self.contact_repo.update(
                contact_id, expected_version=expected_version, **update_dict
            )
            if updated is None:
                raise ConflictError(
                    f"Contact {contact_id} was modified by another request",
                    {"entity": "Contact", "id": contact_id, "expected_version": expected_version},
                )
        return await self.get_contact(contact_id)

    async def set_primary_company(self, contact_id: int, company_id: Optional[int]) -> ContactResponse:
        """Set or clear ``primary_company_id`` without touching any area of activity."""
        if company_id is not None and not await self.company_repo.exists(company_id):
            raise NotFoundError("Company", company_id)

        async with self._unit_of_work("set_primary_company"):
            updated = await self.contact_repo.set_primary_company(contact_id, company_id)
            if updated is None:
                raise NotFoundError("Contact", contact_id)

        logger.info(
            "Contact primary company synced",
            extra={"contact_id": contact_id, "primary_company_id": company_id},
        )
        return self._to_response(updated)

    def _to_response(self, contact) -> ContactResponse:
        """Convert contact model to response schema."""
        return ContactResponse.model_validate(contact)
