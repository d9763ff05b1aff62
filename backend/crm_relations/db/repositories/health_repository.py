"""
Health repository.
Checks database connectivity and the presence of the relationship tables.
"""

from typing import Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func, text

from crm_relations.models import AreaOfActivity, Synergy


class HealthRepository:
    """Repository for health check operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_database(self) -> bool:
        """
        Check database connectivity.

        Returns:
            True if database is accessible, False otherwise
        """
        try:
            result = await self.session.execute(text("SELECT 1"))
            return result.scalar() == 1
        except SQLAlchemyError:
            return False

    async def relationship_counts(self) -> Dict[str, int]:
        """Row counts of the association tables."""
        areas = await self.session.execute(select(func.count(AreaOfActivity.id)))
        synergies = await self.session.execute(select(func.count(Synergy.id)))
        return {
            "areas_of_activity": areas.scalar() or 0,
            "synergies": synergies.scalar() or 0,
        }
