"""Result store for eligibility evaluations."""

from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.enums import EligibilityStatus
from admissions.models.domain.eligibility import EligibilityResult
from admissions.repositories.base import BaseRepository


class EligibilityResultRepository(BaseRepository[EligibilityResult]):
    """
    Repository for EligibilityResult.

    Holds at most one result per application. The unique constraint on
    application_id backs the upsert; concurrent evaluations of the same
    application resolve as last writer wins.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the eligibility result repository.

        Args:
            db: Async database session
        """
        super().__init__(EligibilityResult, db)

    async def get_by_application(self, application_id: UUID) -> Optional[EligibilityResult]:
        """
        Retrieve the result for an application.

        Args:
            application_id: The UUID of the application

        Returns:
            The result, or None if the application was never evaluated
        """
        stmt = select(EligibilityResult).where(
            EligibilityResult.application_id == application_id
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, application_id: UUID, **fields: Any) -> EligibilityResult:
        """
        Create the result for an application or replace every field of the existing one.

        Args:
            application_id: The UUID of the application
            **fields: Complete set of result fields

        Returns:
            The persisted result
        """
        existing = await self.get_by_application(application_id)
        if existing is None:
            return await self.create(application_id=application_id, **fields)
        return await self.update(existing, **fields)

    async def get_by_user(self, user_id: UUID) -> List[EligibilityResult]:
        """Results for every application of a user, most recent evaluation first."""
        stmt = (
            select(EligibilityResult)
            .where(EligibilityResult.user_id == user_id)
            .order_by(EligibilityResult.evaluated_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_results(
        self,
        status: Optional[EligibilityStatus] = None,
        program_id: Optional[UUID] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> List[EligibilityResult]:
        """
        List results, most recent evaluation first, with optional filters.

        Args:
            status: Restrict to one verdict
            program_id: Restrict to one program
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return

        Returns:
            List of matching results
        """
        return await self.find_by(
            skip=skip,
            limit=limit,
            order_by=EligibilityResult.evaluated_at.desc(),
            status=status,
            program_id=program_id,
        )

    async def count_results(
        self,
        status: Optional[EligibilityStatus] = None,
        program_id: Optional[UUID] = None,
    ) -> int:
        """Count results matching the same filters as list_results."""
        return await self.count(status=status, program_id=program_id)
