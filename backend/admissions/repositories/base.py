"""Generic repository with async CRUD helpers shared by every aggregate."""

from typing import Any, Generic, List, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.db.base import Base

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Domain repositories extend this class with their own queries. Methods
    flush but never commit; the caller owns the transaction.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    def _filtered(self, stmt, filters: dict):
        """Apply equality filters, skipping unknown fields and None values."""
        for field, value in filters.items():
            if value is not None and hasattr(self.model, field):
                stmt = stmt.where(getattr(self.model, field) == value)
        return stmt

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new entity.

        Args:
            **kwargs: Field values for the new entity

        Returns:
            The created entity with generated ID
        """
        instance = self.model(**kwargs)
        self.db.add(instance)
        await self.db.flush()
        await self.db.refresh(instance)
        return instance

    async def get_by_id(self, id: UUID) -> Optional[ModelType]:
        """
        Retrieve an entity by its ID.

        Args:
            id: The UUID of the entity

        Returns:
            The entity if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """
        Update fields on a loaded entity.

        Args:
            instance: The entity to modify
            **kwargs: Fields to update with new values

        Returns:
            The updated entity
        """
        for field, value in kwargs.items():
            setattr(instance, field, value)
        await self.db.flush()
        await self.db.refresh(instance)
        return instance

    async def count(self, **filters: Any) -> int:
        """
        Count entities matching the given filters.

        Args:
            **filters: Field equality filters; None values are ignored

        Returns:
            Count of matching entities
        """
        stmt = self._filtered(select(func.count()).select_from(self.model), filters)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def find_by(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: Optional[Any] = None,
        **filters: Any,
    ) -> List[ModelType]:
        """
        Find entities matching the given field filters.

        Args:
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return
            order_by: Optional ordering clause
            **filters: Field equality filters (e.g., status="approved")

        Returns:
            List of matching entities
        """
        stmt = self._filtered(select(self.model), filters)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        stmt = stmt.offset(skip).limit(limit)

        result = await self.db.execute(stmt)
        return list(result.scalars().all())
