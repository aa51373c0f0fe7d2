"""Pydantic schemas for application-related entities."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from admissions.core.enums import ApplicationStatus, Decision, EntrySemester


# ==================== Course Schemas ====================


class CourseEntry(BaseModel):
    """A course on the applicant's academic record."""

    code: Optional[str] = Field(None, max_length=50)
    name: Optional[str] = Field(None, max_length=255)
    grade: Optional[str] = Field(None, max_length=10)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: Optional[str]) -> Optional[str]:
        """Normalise course codes to uppercase."""
        return v.strip().upper() if v else v


# ==================== Application Schemas ====================


class ApplicationBase(BaseModel):
    """Base schema for application with the applicant-editable fields."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=30)
    date_of_birth: Optional[date] = None
    gender: Optional[str] = Field(None, max_length=20)
    nationality: Optional[str] = Field(None, max_length=100)
    national_id: Optional[str] = Field(None, max_length=100)
    address_line1: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    entry_year: Optional[int] = Field(None, ge=2000, le=2100)
    entry_semester: Optional[EntrySemester] = None
    high_school_name: Optional[str] = Field(None, max_length=255)
    high_school_graduation_year: Optional[int] = Field(None, ge=1950, le=2100)
    high_school_gpa: Optional[Decimal] = Field(None, ge=0)
    gpa_scale: Decimal = Field(Decimal("4.00"), gt=0)
    courses: list[CourseEntry] = Field(default_factory=list)


class ApplicationCreate(ApplicationBase):
    """Schema for creating a draft application."""

    user_id: UUID
    program_id: UUID


class ApplicationUpdate(BaseModel):
    """Schema for updating a draft application (all fields optional)."""

    program_id: Optional[UUID] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=30)
    date_of_birth: Optional[date] = None
    gender: Optional[str] = Field(None, max_length=20)
    nationality: Optional[str] = Field(None, max_length=100)
    national_id: Optional[str] = Field(None, max_length=100)
    address_line1: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    entry_year: Optional[int] = Field(None, ge=2000, le=2100)
    entry_semester: Optional[EntrySemester] = None
    high_school_name: Optional[str] = Field(None, max_length=255)
    high_school_graduation_year: Optional[int] = Field(None, ge=1950, le=2100)
    high_school_gpa: Optional[Decimal] = Field(None, ge=0)
    gpa_scale: Optional[Decimal] = Field(None, gt=0)
    courses: Optional[list[CourseEntry]] = None


class ApplicationResponse(ApplicationBase):
    """Schema for application response."""

    id: UUID
    user_id: UUID
    program_id: UUID
    status: ApplicationStatus
    fee_paid: bool
    payment_reference: Optional[str] = None
    decision: Decision
    decision_by: Optional[str] = None
    decision_notes: Optional[str] = None
    decision_date: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ApplicationListResponse(BaseModel):
    """Schema for paginated list of applications."""

    items: list[ApplicationResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


# ==================== Workflow Schemas ====================


class PaymentRequest(BaseModel):
    """Schema for recording the application fee payment."""

    payment_reference: Optional[str] = Field(None, max_length=100)


class StatusUpdateRequest(BaseModel):
    """Schema for a staff status change."""

    status: ApplicationStatus
    changed_by: str = Field(..., min_length=1, max_length=64)


class DecisionRequest(BaseModel):
    """Schema for an admission decision."""

    decision: Decision
    decided_by: str = Field(..., min_length=1, max_length=64)
    notes: Optional[str] = None
