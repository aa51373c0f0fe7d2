"""Pydantic schemas for programs and admission requirements."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ProgramRequirementResponse(BaseModel):
    """Schema for a program's admission requirements (None means the default applies)."""

    min_gpa: Optional[Decimal] = None
    mandatory_courses: Optional[list[str]] = None
    required_documents: Optional[list[str]] = None

    model_config = ConfigDict(from_attributes=True)


class ProgramResponse(BaseModel):
    """Schema for program response."""

    id: UUID
    name: str
    code: str
    department: Optional[str] = None
    description: Optional[str] = None
    active: bool
    requirement: Optional[ProgramRequirementResponse] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
