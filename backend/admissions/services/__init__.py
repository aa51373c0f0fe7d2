"""Service layer for business logic."""

from admissions.services.application_service import ApplicationService
from admissions.services.document_service import DocumentService
from admissions.services.eligibility_service import EligibilityService
from admissions.services.program_service import ProgramService

__all__ = ["ApplicationService", "DocumentService", "EligibilityService", "ProgramService"]
