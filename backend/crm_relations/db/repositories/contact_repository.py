"""
Contact repository for database operations.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from crm_relations.db.repositories.base_repository import BaseRepository
from crm_relations.models.contact import Contact
from crm_relations.models.area_of_activity import AreaOfActivity


class ContactRepository(BaseRepository[Contact]):
    """Repository for contact operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Contact, session)

    def _base_query(self):
        """Base query with areas of activity eagerly loaded."""
        return self._select().options(selectinload(Contact.areas_of_activity))

    async def get(self, id: int) -> Optional[Contact]:
        """Get contact by ID with its areas of activity loaded."""
        result = await self.session.execute(self._base_query().where(Contact.id == id))
        return result.scalar_one_or_none()

    async def list_all(
        self,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Contact]:
        """List all contacts with pagination."""
        query = self._base_query().order_by(Contact.id).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_ids(self) -> List[int]:
        """List every contact ID."""
        result = await self.session.execute(select(Contact.id).order_by(Contact.id))
        return list(result.scalars().all())

    async def set_primary_company(self, contact_id: int, company_id: Optional[int]) -> Optional[Contact]:
        """Point the denormalized primary company of a contact at ``company_id`` (or clear it)."""
        return await self.update(contact_id, primary_company_id=company_id)

    async def list_by_company(self, company_id: int) -> List[Contact]:
        """List contacts holding an area of activity at a company."""
        query = (
            self._base_query()
            .join(AreaOfActivity, AreaOfActivity.contact_id == Contact.id)
            .where(AreaOfActivity.company_id == company_id)
            .order_by(Contact.last_name, Contact.first_name, Contact.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
