"""Academic program and admission requirement domain models."""

import uuid
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from admissions.db.base import BaseModel, JSONType


class Program(BaseModel):
    """Degree program applicants apply to."""

    __tablename__ = "programs"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    department: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    # Relationships
    requirement: Mapped[Optional["ProgramRequirement"]] = relationship(
        "ProgramRequirement",
        back_populates="program",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Program(id={self.id}, code={self.code!r}, name={self.name!r})>"


class ProgramRequirement(BaseModel):
    """
    Admission requirements for a program.

    A NULL list column means "use the configured default"; an empty list
    means the program has no requirement on that axis.
    """

    __tablename__ = "program_requirements"

    program_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("programs.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    min_gpa: Mapped[Optional[Decimal]] = mapped_column(Numeric(4, 2), nullable=True)
    mandatory_courses: Mapped[Optional[list[str]]] = mapped_column(
        JSONType, nullable=True
    )  # e.g., ["Biology", "Chemistry"] or ["BIO101", "CHEM101"]
    required_documents: Mapped[Optional[list[str]]] = mapped_column(
        JSONType, nullable=True
    )  # DocumentType values

    # Relationships
    program: Mapped["Program"] = relationship("Program", back_populates="requirement")

    def __repr__(self) -> str:
        return (
            f"<ProgramRequirement(program_id={self.program_id}, "
            f"min_gpa={self.min_gpa})>"
        )
