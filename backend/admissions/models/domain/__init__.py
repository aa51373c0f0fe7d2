"""Domain models for the application."""

from admissions.models.domain.application import Application
from admissions.models.domain.document import Document
from admissions.models.domain.eligibility import EligibilityResult
from admissions.models.domain.program import Program, ProgramRequirement

__all__ = [
    "Application",
    "Document",
    "EligibilityResult",
    "Program",
    "ProgramRequirement",
]
