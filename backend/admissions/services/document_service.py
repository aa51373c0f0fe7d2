"""Document service for registering and verifying application documents."""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from admissions.core.enums import DocumentStatus, DocumentType
from admissions.core.exceptions import NotFoundError, ValidationError
from admissions.core.workflow import TERMINAL_STATUSES
from admissions.db.base import utcnow
from admissions.models.domain.document import Document
from admissions.repositories.application_repository import ApplicationRepository
from admissions.repositories.document_repository import DocumentRepository

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service for application documents.

    Binary content is stored elsewhere; this service tracks the file
    reference and the staff verification status that eligibility reads.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the document service.

        Args:
            db: Async database session
        """
        self.db = db
        self.repo = DocumentRepository(db)
        self.application_repo = ApplicationRepository(db)

    async def register_document(
        self,
        application_id: UUID,
        doc_type: DocumentType,
        file_reference: str,
        uploaded_by: str,
        file_name: Optional[str] = None,
    ) -> Document:
        """
        Register an uploaded document awaiting review.

        Args:
            application_id: UUID of the application
            doc_type: Kind of document
            file_reference: Opaque reference into the file store
            uploaded_by: Uploader identifier
            file_name: Original file name

        Returns:
            The created document in pending_review status

        Raises:
            NotFoundError: If the application does not exist
            ValidationError: If the application is closed
        """
        application = await self.application_repo.get_by_id(application_id)
        if not application:
            raise NotFoundError(f"Application with ID {application_id} not found")
        if application.status in TERMINAL_STATUSES:
            raise ValidationError(
                f"Cannot add documents to application with status {application.status.value}"
            )

        document = await self.repo.create(
            application_id=application_id,
            type=doc_type,
            status=DocumentStatus.PENDING_REVIEW,
            file_reference=file_reference,
            file_name=file_name,
            uploaded_by=uploaded_by,
        )
        await self.db.commit()

        logger.info(
            f"Document registered: {document.id} ({doc_type.value}) for application {application_id}"
        )
        return document

    async def list_documents(self, application_id: UUID) -> List[Document]:
        """
        List an application's documents.

        Raises:
            NotFoundError: If the application does not exist
        """
        if not await self.application_repo.get_by_id(application_id):
            raise NotFoundError(f"Application with ID {application_id} not found")
        return await self.repo.list_by_application(application_id)

    async def verify_document(
        self,
        document_id: UUID,
        status: DocumentStatus,
        verified_by: str,
        note: Optional[str] = None,
    ) -> Document:
        """
        Approve or reject a document.

        Args:
            document_id: UUID of the document
            status: approved or rejected
            verified_by: Staff identifier
            note: Optional verification note

        Returns:
            The verified document

        Raises:
            NotFoundError: If the document does not exist
            ValidationError: If status is not a verification outcome
        """
        if status == DocumentStatus.PENDING_REVIEW:
            raise ValidationError("Verification status must be approved or rejected")

        document = await self.repo.get_by_id(document_id)
        if not document:
            raise NotFoundError(f"Document with ID {document_id} not found")

        document = await self.repo.update(
            document,
            status=status,
            verified_by=verified_by,
            verified_at=utcnow(),
            verify_note=note,
        )
        await self.db.commit()

        logger.info(f"Document {document_id} {status.value} by {verified_by}")
        return document
