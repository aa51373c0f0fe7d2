"""Repository for admission application data access with specialized queries."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.enums import ApplicationStatus
from admissions.models.domain.application import Application
from admissions.repositories.base import BaseRepository


class ApplicationRepository(BaseRepository[Application]):
    """
    Repository for Application with specialized queries.

    Provides filtered listing for applicants and staff, and status updates
    used by the workflow and the eligibility orchestrator.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the application repository.

        Args:
            db: Async database session
        """
        super().__init__(Application, db)

    async def list_applications(
        self,
        user_id: Optional[UUID] = None,
        status: Optional[ApplicationStatus] = None,
        program_id: Optional[UUID] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Application]:
        """
        List applications, newest first, with optional filters.

        Args:
            user_id: Restrict to one applicant
            status: Restrict to one status
            program_id: Restrict to one program
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return

        Returns:
            List of matching applications
        """
        return await self.find_by(
            skip=skip,
            limit=limit,
            order_by=Application.created_at.desc(),
            user_id=user_id,
            status=status,
            program_id=program_id,
        )

    async def update_status(
        self, application: Application, status: ApplicationStatus, **fields
    ) -> Application:
        """
        Set a new status on an application along with any related fields.

        The caller is responsible for validating the transition.

        Args:
            application: Loaded application to update
            status: New status
            **fields: Additional columns to set (e.g., reviewed_at)

        Returns:
            The updated application
        """
        return await self.update(application, status=status, **fields)
