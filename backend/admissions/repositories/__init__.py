from .base import BaseRepository
from .application_repository import ApplicationRepository
from .document_repository import DocumentRepository
from .eligibility_repository import EligibilityResultRepository
from .program_repository import ProgramRepository

__all__ = [
    "BaseRepository",
    "ApplicationRepository",
    "DocumentRepository",
    "EligibilityResultRepository",
    "ProgramRepository",
]
