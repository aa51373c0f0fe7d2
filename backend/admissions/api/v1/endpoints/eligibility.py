"""Eligibility evaluation and result endpoints."""

import logging
import math
from typing import Annotated, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.api.v1.errors import error_detail, to_http_exception
from admissions.core.enums import EligibilityStatus
from admissions.core.exceptions import AdmissionsError
from admissions.db.session import get_session
from admissions.models.schemas.eligibility import (
    EligibilityResultListResponse,
    EligibilityResultResponse,
    EvaluationRequest,
)
from admissions.services.eligibility_service import EligibilityService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/evaluate/{application_id}",
    response_model=EligibilityResultResponse,
    summary="Evaluate application eligibility",
    description="Run the rule engine for an application and store the result",
)
async def evaluate_application(
    application_id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
    request: Optional[EvaluationRequest] = None,
) -> EligibilityResultResponse:
    """
    Evaluate an application's eligibility.

    This endpoint:
    1. Checks GPA against the program minimum
    2. Checks total and mandatory courses
    3. Checks approved documents
    4. Scores application completeness
    5. Stores the verdict, replacing any earlier result

    Re-evaluating with unchanged inputs yields the same verdict.
    """
    evaluated_by = request.evaluated_by if request else "system"
    try:
        service = EligibilityService(db)
        result = await service.evaluate(application_id, evaluated_by=evaluated_by)
        return EligibilityResultResponse.model_validate(result)

    except AdmissionsError as e:
        logger.error(f"Error evaluating application {application_id}: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error evaluating eligibility: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail("InternalError", "Failed to evaluate eligibility"),
        )


@router.get(
    "/result/{application_id}",
    response_model=EligibilityResultResponse,
    summary="Get eligibility result",
)
async def get_eligibility_result(
    application_id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> EligibilityResultResponse:
    """Retrieve the stored eligibility result for an application."""
    try:
        service = EligibilityService(db)
        result = await service.get_result(application_id)
        return EligibilityResultResponse.model_validate(result)
    except AdmissionsError as e:
        raise to_http_exception(e)


@router.get(
    "/users/{user_id}/results",
    response_model=List[EligibilityResultResponse],
    summary="Get a user's eligibility results",
)
async def get_user_results(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> List[EligibilityResultResponse]:
    """Retrieve results for all of a user's applications, most recent first."""
    try:
        service = EligibilityService(db)
        results = await service.get_user_results(user_id)
        return [EligibilityResultResponse.model_validate(r) for r in results]
    except AdmissionsError as e:
        raise to_http_exception(e)


@router.get(
    "/results",
    response_model=EligibilityResultListResponse,
    summary="List eligibility results",
    description="Staff view of eligibility results with filters and pagination",
)
async def list_eligibility_results(
    db: Annotated[AsyncSession, Depends(get_session)],
    status_filter: Annotated[
        Optional[EligibilityStatus], Query(alias="status", description="Filter by verdict")
    ] = None,
    program_id: Annotated[Optional[UUID], Query(description="Filter by program")] = None,
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Number of items per page")] = 10,
) -> EligibilityResultListResponse:
    """List eligibility results, most recent evaluation first."""
    try:
        service = EligibilityService(db)
        results, total = await service.list_results(
            status=status_filter,
            program_id=program_id,
            page=page,
            limit=limit,
        )
    except AdmissionsError as e:
        raise to_http_exception(e)

    return EligibilityResultListResponse(
        items=[EligibilityResultResponse.model_validate(r) for r in results],
        total=total,
        page=page,
        page_size=limit,
        total_pages=math.ceil(total / limit) if total > 0 else 0,
    )


@router.get(
    "/requirements",
    summary="Get eligibility requirements",
    description="Describe the configured eligibility rules (display only)",
)
async def get_requirements(
    db: Annotated[AsyncSession, Depends(get_session)],
) -> dict:
    """Return the configured default requirements, weights and thresholds."""
    service = EligibilityService(db)
    return service.get_requirements()
