"""Repository for programs and their admission requirements."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from admissions.models.domain.program import Program, ProgramRequirement
from admissions.repositories.base import BaseRepository


class ProgramRepository(BaseRepository[Program]):
    """Repository for Program with requirement lookups."""

    def __init__(self, db: AsyncSession):
        super().__init__(Program, db)

    async def get_with_requirement(self, id: UUID) -> Optional[Program]:
        """
        Retrieve a program with its requirement row eagerly loaded.

        Args:
            id: The UUID of the program

        Returns:
            The program, or None if not found
        """
        stmt = (
            select(Program)
            .where(Program.id == id)
            .options(selectinload(Program.requirement))
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active(self, skip: int = 0, limit: int = 100) -> List[Program]:
        """List active programs ordered by name, requirements loaded."""
        stmt = (
            select(Program)
            .where(Program.active.is_(True))
            .options(selectinload(Program.requirement))
            .order_by(Program.name)
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_requirement(self, program_id: UUID) -> Optional[ProgramRequirement]:
        """
        Retrieve the requirement row for a program.

        Args:
            program_id: The UUID of the program

        Returns:
            The requirement row, or None if the program has none
        """
        stmt = select(ProgramRequirement).where(ProgramRequirement.program_id == program_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
