"""Supporting document domain model."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions.core.enums import DocumentStatus, DocumentType
from admissions.db.base import BaseModel
from admissions.models.domain.application import enum_values


class Document(BaseModel):
    """Document uploaded for an application and verified by staff."""

    __tablename__ = "documents"

    application_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    type: Mapped[DocumentType] = mapped_column(
        SQLEnum(DocumentType, name="document_type", values_callable=enum_values),
        nullable=False,
    )
    status: Mapped[DocumentStatus] = mapped_column(
        SQLEnum(DocumentStatus, name="document_status", values_callable=enum_values),
        default=DocumentStatus.PENDING_REVIEW,
        nullable=False,
        index=True,
    )

    # Storage reference (binary content lives in the host's file store)
    file_reference: Mapped[str] = mapped_column(String(500), nullable=False)
    file_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Verification
    uploaded_by: Mapped[str] = mapped_column(String(64), nullable=False)
    verified_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    verified_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    verify_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    application: Mapped["Application"] = relationship(
        "Application", back_populates="documents"
    )

    def __repr__(self) -> str:
        return (
            f"<Document(id={self.id}, type={self.type.value}, "
            f"status={self.status.value})>"
        )
