"""Document registration and verification endpoints."""

import logging
from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.api.v1.errors import error_detail, to_http_exception
from admissions.core.exceptions import AdmissionsError
from admissions.db.session import get_session
from admissions.models.schemas.document import DocumentCreate, DocumentResponse, DocumentVerify
from admissions.services.document_service import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/applications/{application_id}/documents",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a document",
    description="Register an uploaded document for an application; it awaits staff review",
)
async def register_document(
    application_id: UUID,
    document_data: DocumentCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> DocumentResponse:
    """Register an uploaded document in pending_review status."""
    try:
        service = DocumentService(db)
        document = await service.register_document(
            application_id=application_id,
            doc_type=document_data.type,
            file_reference=document_data.file_reference,
            uploaded_by=document_data.uploaded_by,
            file_name=document_data.file_name,
        )
        return DocumentResponse.model_validate(document)

    except AdmissionsError as e:
        logger.error(f"Error registering document for application {application_id}: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error registering document: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("InternalError", "Failed to register document"),
        )


@router.get(
    "/applications/{application_id}/documents",
    response_model=List[DocumentResponse],
    summary="List application documents",
)
async def list_documents(
    application_id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> List[DocumentResponse]:
    """List an application's documents in upload order."""
    try:
        service = DocumentService(db)
        documents = await service.list_documents(application_id)
        return [DocumentResponse.model_validate(doc) for doc in documents]
    except AdmissionsError as e:
        raise to_http_exception(e)


@router.patch(
    "/documents/{document_id}/verify",
    response_model=DocumentResponse,
    summary="Verify a document",
    description="Approve or reject a document; only approved documents count toward eligibility",
)
async def verify_document(
    document_id: UUID,
    request: DocumentVerify,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> DocumentResponse:
    """Approve or reject a document on behalf of staff."""
    try:
        service = DocumentService(db)
        document = await service.verify_document(
            document_id,
            status=request.status,
            verified_by=request.verified_by,
            note=request.note,
        )
        return DocumentResponse.model_validate(document)

    except AdmissionsError as e:
        logger.error(f"Error verifying document {document_id}: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error verifying document: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("InternalError", "Failed to verify document"),
        )
