"""
Company repository for database operations.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from crm_relations.db.repositories.base_repository import BaseRepository
from crm_relations.models.company import Company
from crm_relations.models.area_of_activity import AreaOfActivity


class CompanyRepository(BaseRepository[Company]):
    """Repository for company operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Company, session)

    def _base_query(self):
        """Base query with the primary contact eagerly loaded."""
        return self._select().options(selectinload(Company.primary_contact))

    async def get(self, id: int) -> Optional[Company]:
        """Get company by ID with primary contact loaded."""
        result = await self.session.execute(self._base_query().where(Company.id == id))
        return result.scalar_one_or_none()

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
        **filters,
    ) -> List[Company]:
        """List companies ordered by name."""
        query = self._base_query()
        for key, value in filters.items():
            if hasattr(Company, key):
                query = query.where(getattr(Company, key) == value)
        query = query.order_by(Company.name, Company.id).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def set_primary_contact(
        self,
        company_id: int,
        contact_id: Optional[int],
        expected_version: Optional[int] = None,
    ) -> Optional[Company]:
        """Set or clear the company's primary contact."""
        return await self.update(
            company_id,
            expected_version=expected_version,
            primary_contact_id=contact_id,
        )

    async def list_by_contact(self, contact_id: int) -> List[Company]:
        """List companies a contact holds an area of activity at, primary first."""
        query = (
            self._base_query()
            .join(AreaOfActivity, AreaOfActivity.company_id == Company.id)
            .where(AreaOfActivity.contact_id == contact_id)
            .order_by(AreaOfActivity.is_primary.desc(), Company.name, Company.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
