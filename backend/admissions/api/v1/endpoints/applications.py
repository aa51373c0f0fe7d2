"""Application lifecycle endpoints."""

import logging
import math
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.api.v1.errors import error_detail, to_http_exception
from admissions.core.enums import ApplicationStatus
from admissions.core.exceptions import AdmissionsError
from admissions.db.session import get_session
from admissions.models.schemas.application import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationUpdate,
    DecisionRequest,
    PaymentRequest,
    StatusUpdateRequest,
)
from admissions.services.application_service import ApplicationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new application",
    description="Create a draft admission application for a program",
)
async def create_application(
    application_data: ApplicationCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> ApplicationResponse:
    """
    Create a draft application.

    The program must exist and be active. Personal details and the academic
    record may be completed later while the application is a draft.
    """
    try:
        service = ApplicationService(db)
        application = await service.create_application(
            user_id=application_data.user_id,
            data=application_data.model_dump(exclude={"user_id"}),
        )
        return ApplicationResponse.model_validate(application)

    except AdmissionsError as e:
        logger.error(f"Error creating application: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error creating application: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("InternalError", "Failed to create application"),
        )


@router.get(
    "",
    response_model=ApplicationListResponse,
    summary="List applications",
    description="Retrieve applications with optional filters and pagination",
)
async def list_applications(
    db: Annotated[AsyncSession, Depends(get_session)],
    user_id: Annotated[Optional[UUID], Query(description="Filter by applicant")] = None,
    status_filter: Annotated[
        Optional[ApplicationStatus], Query(alias="status", description="Filter by status")
    ] = None,
    program_id: Annotated[Optional[UUID], Query(description="Filter by program")] = None,
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    page_size: Annotated[
        int, Query(ge=1, le=100, description="Number of items per page")
    ] = 20,
) -> ApplicationListResponse:
    """List applications, newest first."""
    service = ApplicationService(db)
    applications, total = await service.list_applications(
        user_id=user_id,
        status=status_filter,
        program_id=program_id,
        page=page,
        page_size=page_size,
    )

    return ApplicationListResponse(
        items=[ApplicationResponse.model_validate(app) for app in applications],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(total / page_size) if total > 0 else 0,
    )


@router.get(
    "/{application_id}",
    response_model=ApplicationResponse,
    summary="Get application by ID",
)
async def get_application(
    application_id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> ApplicationResponse:
    """Retrieve an application by ID."""
    try:
        service = ApplicationService(db)
        application = await service.get_application(application_id)
        return ApplicationResponse.model_validate(application)
    except AdmissionsError as e:
        raise to_http_exception(e)


@router.patch(
    "/{application_id}",
    response_model=ApplicationResponse,
    summary="Update a draft application",
    description="Update fields of an application that has not been submitted yet",
)
async def update_application(
    application_id: UUID,
    update_data: ApplicationUpdate,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> ApplicationResponse:
    """Update a draft application; only provided fields change."""
    try:
        service = ApplicationService(db)
        application = await service.update_application(
            application_id,
            update_data.model_dump(exclude_unset=True),
        )
        return ApplicationResponse.model_validate(application)

    except AdmissionsError as e:
        logger.error(f"Error updating application {application_id}: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating application: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("InternalError", "Failed to update application"),
        )


@router.post(
    "/{application_id}/pay",
    response_model=ApplicationResponse,
    summary="Pay the application fee",
    description="Record the application fee as paid (no payment gateway)",
)
async def pay_application_fee(
    application_id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
    payment: Optional[PaymentRequest] = None,
) -> ApplicationResponse:
    """Mark the application fee as paid."""
    try:
        service = ApplicationService(db)
        application = await service.pay_fee(
            application_id,
            payment_reference=payment.payment_reference if payment else None,
        )
        return ApplicationResponse.model_validate(application)

    except AdmissionsError as e:
        logger.error(f"Error paying fee for application {application_id}: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error paying application fee: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("InternalError", "Failed to record payment"),
        )


@router.post(
    "/{application_id}/submit",
    response_model=ApplicationResponse,
    summary="Submit application",
    description="Submit a draft application and run the automatic eligibility evaluation",
)
async def submit_application(
    application_id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> ApplicationResponse:
    """
    Submit an application for review.

    Validates:
    - Application is a draft
    - Required personal and intake fields are present
    - Fee is paid (when configured)
    """
    try:
        service = ApplicationService(db)
        application = await service.submit_application(application_id)
        return ApplicationResponse.model_validate(application)

    except AdmissionsError as e:
        logger.error(f"Error submitting application {application_id}: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error submitting application: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("InternalError", "Failed to submit application"),
        )


@router.post(
    "/{application_id}/withdraw",
    response_model=ApplicationResponse,
    summary="Withdraw application",
)
async def withdraw_application(
    application_id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> ApplicationResponse:
    """Withdraw an application that has not been decided."""
    try:
        service = ApplicationService(db)
        application = await service.withdraw_application(application_id)
        return ApplicationResponse.model_validate(application)

    except AdmissionsError as e:
        logger.error(f"Error withdrawing application {application_id}: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error withdrawing application: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("InternalError", "Failed to withdraw application"),
        )


@router.patch(
    "/{application_id}/status",
    response_model=ApplicationResponse,
    summary="Change application status",
    description="Staff status change validated against the status workflow",
)
async def update_application_status(
    application_id: UUID,
    request: StatusUpdateRequest,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> ApplicationResponse:
    """Change an application's status on behalf of staff."""
    try:
        service = ApplicationService(db)
        application = await service.update_application_status(
            application_id,
            status=request.status,
            changed_by=request.changed_by,
        )
        return ApplicationResponse.model_validate(application)

    except AdmissionsError as e:
        logger.error(f"Error changing status of application {application_id}: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error changing application status: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("InternalError", "Failed to update application status"),
        )


@router.post(
    "/{application_id}/decision",
    response_model=ApplicationResponse,
    summary="Record admission decision",
    description="Accept, reject or waitlist an application under review",
)
async def make_decision(
    application_id: UUID,
    request: DecisionRequest,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> ApplicationResponse:
    """Record an admission decision."""
    try:
        service = ApplicationService(db)
        application = await service.make_decision(
            application_id,
            decision=request.decision,
            decided_by=request.decided_by,
            notes=request.notes,
        )
        return ApplicationResponse.model_validate(application)

    except AdmissionsError as e:
        logger.error(f"Error recording decision for application {application_id}: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error recording decision: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("InternalError", "Failed to record decision"),
        )
