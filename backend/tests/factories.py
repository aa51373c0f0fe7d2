"""Builders for programs, applications and documents used across tests."""

import uuid
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from admissions.core.enums import (
    ApplicationStatus,
    DocumentStatus,
    DocumentType,
    EntrySemester,
)
from admissions.models.domain import Application, Document, Program, ProgramRequirement

MANDATORY = ["Biology", "Chemistry", "Physics", "Mathematics", "English"]

FULL_COURSE_LIST = [
    {"code": "BIO101", "name": "Biology", "grade": "A"},
    {"code": "CHEM101", "name": "Chemistry", "grade": "A"},
    {"code": "PHYS101", "name": "Physics", "grade": "B"},
    {"code": "MATH101", "name": "Mathematics", "grade": "A"},
    {"code": "ENG101", "name": "English", "grade": "B"},
    {"code": "HIST101", "name": "History", "grade": "B"},
    {"code": "GEO101", "name": "Geography", "grade": "A"},
    {"code": "ART101", "name": "Art", "grade": "A"},
]

ALL_DOCUMENTS = [DocumentType.TRANSCRIPT, DocumentType.NATIONAL_ID, DocumentType.PHOTO]


def application_fields(**overrides) -> dict:
    """Complete, submittable applicant profile."""
    fields = dict(
        first_name="Amina",
        last_name="Yusuf",
        email="amina@example.com",
        date_of_birth=date(2006, 3, 14),
        gender="female",
        nationality="Kenyan",
        national_id="KE-1234567",
        entry_year=2027,
        entry_semester=EntrySemester.FALL,
        high_school_name="Nairobi High",
        high_school_gpa=Decimal("3.80"),
        gpa_scale=Decimal("4.00"),
        courses=[dict(c) for c in FULL_COURSE_LIST],
    )
    fields.update(overrides)
    return fields


async def seed_program(
    session,
    code: str = "MED",
    with_requirement: bool = True,
    min_gpa: Optional[Decimal] = Decimal("3.00"),
    mandatory_courses: Optional[list] = None,
    required_documents: Optional[list] = None,
    active: bool = True,
) -> Program:
    program = Program(name=f"Program {code}", code=code, active=active)
    session.add(program)
    await session.flush()
    if with_requirement:
        session.add(
            ProgramRequirement(
                program_id=program.id,
                min_gpa=min_gpa,
                mandatory_courses=MANDATORY if mandatory_courses is None else mandatory_courses,
                required_documents=(
                    [d.value for d in ALL_DOCUMENTS]
                    if required_documents is None
                    else required_documents
                ),
            )
        )
    await session.commit()
    return program


async def seed_application(
    session,
    program: Program,
    status: ApplicationStatus = ApplicationStatus.SUBMITTED,
    user_id: Optional[uuid.UUID] = None,
    fee_paid: bool = True,
    **overrides,
) -> Application:
    application = Application(
        user_id=user_id or uuid.uuid4(),
        program_id=program.id,
        status=status,
        fee_paid=fee_paid,
        **application_fields(**overrides),
    )
    session.add(application)
    await session.commit()
    return application


async def seed_documents(
    session,
    application: Application,
    types: Iterable[DocumentType] = ALL_DOCUMENTS,
    status: DocumentStatus = DocumentStatus.APPROVED,
) -> list[Document]:
    documents = [
        Document(
            application_id=application.id,
            type=doc_type,
            status=status,
            file_reference=f"uploads/{application.id}/{doc_type.value}.pdf",
            uploaded_by="applicant",
        )
        for doc_type in types
    ]
    session.add_all(documents)
    await session.commit()
    return documents
