"""Pydantic schemas for API validation and serialization."""

from admissions.models.schemas.application import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationResponse,
    ApplicationUpdate,
    CourseEntry,
    DecisionRequest,
    PaymentRequest,
    StatusUpdateRequest,
)
from admissions.models.schemas.document import DocumentCreate, DocumentResponse, DocumentVerify
from admissions.models.schemas.eligibility import (
    EligibilityResultListResponse,
    EligibilityResultResponse,
    EvaluationRequest,
)
from admissions.models.schemas.program import ProgramRequirementResponse, ProgramResponse

__all__ = [
    "ApplicationCreate",
    "ApplicationListResponse",
    "ApplicationResponse",
    "ApplicationUpdate",
    "CourseEntry",
    "DecisionRequest",
    "DocumentCreate",
    "DocumentResponse",
    "DocumentVerify",
    "EligibilityResultListResponse",
    "EligibilityResultResponse",
    "EvaluationRequest",
    "PaymentRequest",
    "ProgramRequirementResponse",
    "ProgramResponse",
    "StatusUpdateRequest",
]
