"""
Base repository class with common CRUD operations.
Repositories handle database access using async SQLAlchemy sessions.
"""

from typing import Generic, TypeVar, Type, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func

from crm_relations.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations."""

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    def _select(self):
        """
        Base select statement.
        Rows already in the identity map are refreshed, since bulk updates
        leave server-side columns expired on in-session instances.
        """
        return select(self.model).execution_options(populate_existing=True)

    @property
    def _versioned(self) -> bool:
        return hasattr(self.model, "version")

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record.

        Args:
            **kwargs: Model attributes

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def get(self, id: int) -> Optional[ModelType]:
        """
        Get a record by ID.

        Args:
            id: Record ID

        Returns:
            Model instance or None
        """
        result = await self.session.execute(
            self._select().where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def exists(self, id: int) -> bool:
        """Check whether a record with this ID exists."""
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == id)
        )
        return result.scalar_one_or_none() is not None

    async def missing_ids(self, ids: List[int]) -> List[int]:
        """Return the subset of ``ids`` with no matching record, in input order."""
        if not ids:
            return []
        result = await self.session.execute(
            select(self.model.id).where(self.model.id.in_(ids))
        )
        found = set(result.scalars().all())
        return [record_id for record_id in ids if record_id not in found]

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
        **filters,
    ) -> List[ModelType]:
        """
        List records with pagination and filters.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            **filters: Filter criteria

        Returns:
            List of model instances
        """
        query = self._select()

        for key, value in filters.items():
            if hasattr(self.model, key):
                query = query.where(getattr(self.model, key) == value)

        query = query.order_by(self.model.id).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, **filters) -> int:
        """Count records matching the filters."""
        query = select(func.count(self.model.id))
        for key, value in filters.items():
            if hasattr(self.model, key):
                query = query.where(getattr(self.model, key) == value)
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def update(self, id: int, expected_version: Optional[int] = None, **kwargs) -> Optional[ModelType]:
        """
        Update a record.

        Versioned models get their version bumped on every write. When
        ``expected_version`` is given the write only applies if it matches.

        Args:
            id: Record ID
            expected_version: Version the caller last read, or None for last-write-wins
            **kwargs: Attributes to update

        Returns:
            Updated model instance, or None if no row matched
        """
        stmt = update(self.model).where(self.model.id == id)
        if self._versioned:
            kwargs["version"] = self.model.version + 1
            if expected_version is not None:
                stmt = stmt.where(self.model.version == expected_version)

        result = await self.session.execute(
            stmt.values(**kwargs).execution_options(synchronize_session=False)
        )
        await self.session.flush()
        if result.rowcount == 0:
            return None
        return await self.get(id)

    async def delete(self, id: int) -> bool:
        """
        Delete a record.

        Args:
            id: Record ID

        Returns:
            True if deleted, False if not found
        """
        result = await self.session.execute(
            delete(self.model).where(self.model.id == id).execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount > 0
