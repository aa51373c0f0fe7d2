"""Repository for application documents."""

from typing import List, Set
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.enums import DocumentStatus, DocumentType
from admissions.models.domain.document import Document
from admissions.repositories.base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    """Repository for Document with verification-status queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(Document, db)

    async def list_by_application(self, application_id: UUID) -> List[Document]:
        """List an application's documents in upload order."""
        stmt = (
            select(Document)
            .where(Document.application_id == application_id)
            .order_by(Document.created_at)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def find_approved_types(self, application_id: UUID) -> Set[DocumentType]:
        """
        Return the document types with at least one approved upload.

        Args:
            application_id: The UUID of the application

        Returns:
            Set of approved document types (empty if none)
        """
        stmt = (
            select(Document.type)
            .where(
                Document.application_id == application_id,
                Document.status == DocumentStatus.APPROVED,
            )
            .distinct()
        )
        result = await self.db.execute(stmt)
        return set(result.scalars().all())
