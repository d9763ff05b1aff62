"""
Area of activity repository.
Storage for the contact <-> company association, including the primary flag.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, case, and_, or_

from crm_relations.db.repositories.base_repository import BaseRepository
from crm_relations.models.area_of_activity import AreaOfActivity


class AreaOfActivityRepository(BaseRepository[AreaOfActivity]):
    """Repository for area of activity operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(AreaOfActivity, session)

    async def list_by_contact(self, contact_id: int) -> List[AreaOfActivity]:
        """List areas of activity for a contact."""
        result = await self.session.execute(
            self._select()
            .where(AreaOfActivity.contact_id == contact_id)
            .order_by(AreaOfActivity.id)
        )
        return list(result.scalars().all())

    async def list_by_company(self, company_id: int) -> List[AreaOfActivity]:
        """List areas of activity for a company (indexed on company_id)."""
        result = await self.session.execute(
            self._select()
            .where(AreaOfActivity.company_id == company_id)
            .order_by(AreaOfActivity.id)
        )
        return list(result.scalars().all())

    async def get_by_contact_and_company(self, contact_id: int, company_id: int) -> Optional[AreaOfActivity]:
        """Get the area linking a contact to a company, if any."""
        result = await self.session.execute(
            self._select()
            .where(AreaOfActivity.contact_id == contact_id)
            .where(AreaOfActivity.company_id == company_id)
        )
        return result.scalar_one_or_none()

    async def get_primary(self, contact_id: int) -> Optional[AreaOfActivity]:
        """Get the contact's primary area. Returns the lowest id if more than one is flagged."""
        result = await self.session.execute(
            self._select()
            .where(AreaOfActivity.contact_id == contact_id)
            .where(AreaOfActivity.is_primary.is_(True))
            .order_by(AreaOfActivity.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def clear_primary(self, contact_id: int, except_area_id: Optional[int] = None) -> int:
        """
        Set is_primary=false on the contact's primary areas, optionally sparing one.

        Returns:
            Number of areas demoted
        """
        stmt = (
            update(AreaOfActivity)
            .where(AreaOfActivity.contact_id == contact_id)
            .where(AreaOfActivity.is_primary.is_(True))
        )
        if except_area_id is not None:
            stmt = stmt.where(AreaOfActivity.id != except_area_id)
        result = await self.session.execute(
            stmt.values(is_primary=False, version=AreaOfActivity.version + 1)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount

    async def mark_primary(self, contact_id: int, area_id: int) -> bool:
        """
        Make ``area_id`` the only primary area of the contact in one statement.

        Only rows whose flag actually changes are written. Concurrent calls for
        the same contact each leave exactly one primary area behind; the last
        statement to run wins.

        Returns:
            True if the area belongs to the contact and is now primary
        """
        await self.session.execute(
            update(AreaOfActivity)
            .where(AreaOfActivity.contact_id == contact_id)
            .where(
                or_(
                    and_(AreaOfActivity.id == area_id, AreaOfActivity.is_primary.is_(False)),
                    and_(AreaOfActivity.id != area_id, AreaOfActivity.is_primary.is_(True)),
                )
            )
            .values(
                is_primary=case((AreaOfActivity.id == area_id, True), else_=False),
                version=AreaOfActivity.version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        area = await self.get(area_id)
        return area is not None and area.contact_id == contact_id and area.is_primary

    async def contact_ids_at_company(self, company_id: int, contact_ids: List[int]) -> List[int]:
        """Return which of ``contact_ids`` hold an area of activity at the company."""
        if not contact_ids:
            return []
        result = await self.session.execute(
            select(AreaOfActivity.contact_id)
            .where(AreaOfActivity.company_id == company_id)
            .where(AreaOfActivity.contact_id.in_(contact_ids))
        )
        held = set(result.scalars().all())
        return [contact_id for contact_id in contact_ids if contact_id in held]
