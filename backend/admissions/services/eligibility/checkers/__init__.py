"""Criteria checkers, one per evaluated axis."""

from .completeness_checker import check_completeness
from .course_checker import check_courses, course_satisfies
from .document_checker import check_documents
from .gpa_checker import check_gpa, coerce_gpa

__all__ = [
    "check_completeness",
    "check_courses",
    "check_documents",
    "check_gpa",
    "coerce_gpa",
    "course_satisfies",
]
