"""API v1 router configuration."""

from fastapi import APIRouter

from admissions.api.v1.endpoints import applications, documents, eligibility, health, programs

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    health.router,
    tags=["health"],
)

api_router.include_router(
    applications.router,
    prefix="/applications",
    tags=["applications"],
)

api_router.include_router(
    documents.router,
    tags=["documents"],
)

api_router.include_router(
    programs.router,
    prefix="/programs",
    tags=["programs"],
)

api_router.include_router(
    eligibility.router,
    prefix="/eligibility",
    tags=["eligibility"],
)
