"""Admission application domain model."""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions.core.enums import ApplicationStatus, Decision, EntrySemester
from admissions.db.base import BaseModel, JSONType


def enum_values(enum_cls) -> list[str]:
    """Persist enum values rather than member names."""
    return [member.value for member in enum_cls]


class Application(BaseModel):
    """Applicant's admission application with academic record."""

    __tablename__ = "applications"

    # Ownership & Target Program
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    program_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("programs.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Workflow
    status: Mapped[ApplicationStatus] = mapped_column(
        SQLEnum(ApplicationStatus, name="application_status", values_callable=enum_values),
        default=ApplicationStatus.DRAFT,
        nullable=False,
        index=True,
    )

    # Personal Information
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    nationality: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    national_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Address
    address_line1: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Intake
    entry_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    entry_semester: Mapped[Optional[EntrySemester]] = mapped_column(
        SQLEnum(EntrySemester, name="entry_semester", values_callable=enum_values),
        nullable=True,
    )

    # Previous Education
    high_school_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    high_school_graduation_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    high_school_gpa: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)
    gpa_scale: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=Decimal("4.00"), nullable=False
    )  # 4.00 or 100.00 depending on the applicant's school
    courses: Mapped[list[dict]] = mapped_column(
        JSONType, default=list, nullable=False
    )  # [{"code": "BIO101", "name": "Biology", "grade": "A"}, ...]

    # Fee
    fee_paid: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    payment_reference: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Decision
    decision: Mapped[Decision] = mapped_column(
        SQLEnum(Decision, name="admission_decision", values_callable=enum_values),
        default=Decision.PENDING,
        nullable=False,
    )
    decision_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    decision_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    decision_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Timeline
    submitted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    reviewed_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    # Relationships
    program: Mapped["Program"] = relationship("Program")
    documents: Mapped[list["Document"]] = relationship(
        "Document",
        back_populates="application",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return (
            f"<Application(id={self.id}, user_id={self.user_id}, "
            f"status={self.status.value})>"
        )
