"""Core enums for type safety across the application."""

from enum import Enum


class ApplicationStatus(str, Enum):
    """Admission application workflow states."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    PENDING_DOCUMENTS = "pending_documents"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class Decision(str, Enum):
    """Staff admission decisions."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WAITLISTED = "waitlisted"


class EntrySemester(str, Enum):
    """Intake semesters."""

    FALL = "fall"
    SPRING = "spring"
    SUMMER = "summer"


class DocumentType(str, Enum):
    """Supporting document categories."""

    NATIONAL_ID = "national_id"
    TRANSCRIPT = "transcript"
    PHOTO = "photo"
    CERTIFICATE = "certificate"
    PASSPORT = "passport"
    OTHER = "other"


class DocumentStatus(str, Enum):
    """Document verification states."""

    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class EligibilityStatus(str, Enum):
    """Eligibility verdicts."""

    ELIGIBLE = "eligible"
    NOT_ELIGIBLE = "not_eligible"
    PENDING_REVIEW = "pending_review"


class CriterionType(str, Enum):
    """Axes evaluated by the eligibility checkers."""

    GPA = "gpa_check"
    COURSES = "courses_check"
    DOCUMENTS = "documents_check"
    COMPLETENESS = "completeness_check"


class EvaluationPolicyType(str, Enum):
    """Aggregation strategies available to the rule engine."""

    WEIGHTED = "weighted"
    BOOLEAN = "boolean"


class CourseMatchingMode(str, Enum):
    """How a mandatory course requirement is satisfied by a student course."""

    # Case-insensitive containment in the course name ("AP Biology" ~ "Biology")
    NAME_SUBSTRING = "name_substring"
    # Case-insensitive equality with the course code ("bio101" ~ "BIO101")
    CODE_EXACT = "code_exact"


class StatusUpdateMode(str, Enum):
    """What an evaluation does with the application's own status."""

    NONE = "none"
    RECOMMEND = "recommend"
    AUTO_DECIDE = "auto_decide"
