"""Persisted eligibility evaluation results."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from admissions.core.enums import ApplicationStatus, EligibilityStatus, EvaluationPolicyType
from admissions.db.base import BaseModel, JSONType, utcnow
from admissions.models.domain.application import enum_values


class EligibilityResult(BaseModel):
    """
    Latest eligibility verdict for an application.

    Exactly one row per application; every evaluation replaces the whole row.
    """

    __tablename__ = "eligibility_results"

    application_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    program_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)

    # Verdict
    status: Mapped[EligibilityStatus] = mapped_column(
        SQLEnum(EligibilityStatus, name="eligibility_status", values_callable=enum_values),
        default=EligibilityStatus.PENDING_REVIEW,
        nullable=False,
        index=True,
    )
    eligibility_score: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(5, 2), nullable=True
    )  # 0-100 scale, NULL under the boolean policy
    policy: Mapped[EvaluationPolicyType] = mapped_column(
        SQLEnum(EvaluationPolicyType, name="evaluation_policy", values_callable=enum_values),
        nullable=False,
    )
    recommended_status: Mapped[Optional[ApplicationStatus]] = mapped_column(
        SQLEnum(ApplicationStatus, name="application_status", values_callable=enum_values),
        nullable=True,
    )

    # Breakdown & Justification
    criteria_checked: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
    reasons: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)

    # Audit
    evaluated_by: Mapped[str] = mapped_column(String(64), nullable=False, default="system")
    evaluated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )

    def __repr__(self) -> str:
        return (
            f"<EligibilityResult(application_id={self.application_id}, "
            f"status={self.status.value}, score={self.eligibility_score})>"
        )
