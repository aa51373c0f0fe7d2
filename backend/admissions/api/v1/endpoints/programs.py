"""Program lookup endpoints."""

from typing import Annotated, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from admissions.api.v1.errors import to_http_exception
from admissions.core.exceptions import AdmissionsError
from admissions.db.session import get_session
from admissions.models.schemas.program import ProgramResponse
from admissions.services.program_service import ProgramService

router = APIRouter()


@router.get(
    "",
    response_model=List[ProgramResponse],
    summary="List active programs",
)
async def list_programs(
    db: Annotated[AsyncSession, Depends(get_session)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 100,
) -> List[ProgramResponse]:
    """List programs accepting applications, with their requirements."""
    service = ProgramService(db)
    programs = await service.list_programs(skip=skip, limit=limit)
    return [ProgramResponse.model_validate(program) for program in programs]


@router.get(
    "/{program_id}",
    response_model=ProgramResponse,
    summary="Get program by ID",
)
async def get_program(
    program_id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> ProgramResponse:
    """Retrieve a program with its admission requirements."""
    try:
        service = ProgramService(db)
        program = await service.get_program(program_id)
        return ProgramResponse.model_validate(program)
    except AdmissionsError as e:
        raise to_http_exception(e)
