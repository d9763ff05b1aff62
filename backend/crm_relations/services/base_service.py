"""
Base service class.
Services contain business logic and coordinate repositories.
Every public mutation of a service is one committed storage call.
"""

from abc import ABC
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.core.exceptions import ConflictError, FatalError


class BaseService(ABC):
    """Base service class for all services."""

    session: AsyncSession

    @asynccontextmanager
    async def _unit_of_work(self, operation: str) -> AsyncIterator[None]:
        """
        Commit the enclosed storage work, or roll it back and re-raise.

        Constraint violations surface as ConflictError, any other storage
        failure as FatalError.
        """
        try:
            yield
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError(
                f"{operation} violates a storage constraint",
                {"operation": operation, "error": str(exc.orig)},
            ) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise FatalError(
                f"Storage failure during {operation}",
                {"operation": operation, "error": str(exc)},
            ) from exc
        except Exception:
            await self.session.rollback()
            raise
