"""
Synergy repository for database operations.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete

from crm_relations.db.repositories.base_repository import BaseRepository
from crm_relations.models.synergy import Synergy


class SynergyRepository(BaseRepository[Synergy]):
    """Repository for synergy operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Synergy, session)

    async def _list_where(self, *criteria) -> List[Synergy]:
        result = await self.session.execute(
            self._select().where(*criteria).order_by(Synergy.id)
        )
        return list(result.scalars().all())

    async def list_by_deal(self, deal_id: int) -> List[Synergy]:
        """List synergies for a deal."""
        return await self._list_where(Synergy.deal_id == deal_id)

    async def list_by_contact(self, contact_id: int) -> List[Synergy]:
        """List synergies for a contact."""
        return await self._list_where(Synergy.contact_id == contact_id)

    async def list_by_company(self, company_id: int) -> List[Synergy]:
        """List synergies for a company."""
        return await self._list_where(Synergy.company_id == company_id)

    async def delete_many(self, ids: List[int]) -> int:
        """Delete synergies by ID. Returns the number of rows removed."""
        if not ids:
            return 0
        result = await self.session.execute(
            delete(Synergy).where(Synergy.id.in_(ids)).execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount
