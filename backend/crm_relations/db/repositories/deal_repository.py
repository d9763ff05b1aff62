"""
Deal repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.db.repositories.base_repository import BaseRepository
from crm_relations.models.deal import Deal


class DealRepository(BaseRepository[Deal]):
    """Repository for deal operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Deal, session)
