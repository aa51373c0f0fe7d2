"""Program service for program and requirement lookups."""

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.exceptions import NotFoundError
from admissions.models.domain.program import Program
from admissions.repositories.program_repository import ProgramRepository


class ProgramService:
    """Read-only access to programs and their admission requirements."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = ProgramRepository(db)

    async def list_programs(self, skip: int = 0, limit: int = 100) -> List[Program]:
        """List active programs with requirements loaded."""
        return await self.repo.list_active(skip=skip, limit=limit)

    async def get_program(self, program_id: UUID) -> Program:
        """
        Retrieve a program with its requirements.

        Raises:
            NotFoundError: If the program does not exist
        """
        program = await self.repo.get_with_requirement(program_id)
        if not program:
            raise NotFoundError(f"Program with ID {program_id} not found")
        return program
