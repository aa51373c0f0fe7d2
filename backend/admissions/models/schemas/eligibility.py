"""Pydantic schemas for eligibility evaluation and results."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from admissions.core.enums import ApplicationStatus, EligibilityStatus, EvaluationPolicyType


class EvaluationRequest(BaseModel):
    """Schema for triggering an evaluation."""

    evaluated_by: str = Field("system", min_length=1, max_length=64)


class EligibilityResultResponse(BaseModel):
    """Schema for eligibility result response."""

    id: UUID
    application_id: UUID
    user_id: UUID
    program_id: UUID
    status: EligibilityStatus
    eligibility_score: Optional[Decimal] = None
    policy: EvaluationPolicyType
    recommended_status: Optional[ApplicationStatus] = None
    criteria_checked: dict[str, Any]
    reasons: list[str]
    evaluated_by: str
    evaluated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EligibilityResultListResponse(BaseModel):
    """Schema for paginated list of eligibility results."""

    items: list[EligibilityResultResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
