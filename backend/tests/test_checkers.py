"""Criteria checkers: GPA, courses, documents and completeness."""

from decimal import Decimal

import pytest

from admissions.core.enums import CourseMatchingMode, CriterionType, DocumentType
from admissions.services.eligibility.base import CourseRecord
from admissions.services.eligibility.checkers import (
    check_completeness,
    check_courses,
    check_documents,
    check_gpa,
    coerce_gpa,
)

from factories import FULL_COURSE_LIST, MANDATORY


def courses(*names: str) -> list[CourseRecord]:
    return [CourseRecord(name=name) for name in names]


# ==================== GPA ====================


def test_gpa_above_minimum_passes() -> None:
    result = check_gpa(3.8, 3.0)

    assert result.criterion == CriterionType.GPA
    assert result.passed is True
    assert result.fraction == Decimal("1")
    assert result.reasons == []
    assert result.to_dict() == {"passed": True, "student_gpa": 3.8, "required_gpa": 3.0}


def test_gpa_equal_to_minimum_passes() -> None:
    assert check_gpa("3.00", Decimal("3.00")).passed is True


def test_gpa_below_minimum_fails_with_reason() -> None:
    result = check_gpa(2.5, 3.0)

    assert result.passed is False
    assert result.reasons == ["GPA 2.50 is below minimum 3.00"]
    assert result.fraction == Decimal("2.5") / Decimal("3.0")


def test_gpa_is_not_rounded_before_comparison() -> None:
    assert check_gpa(2.999, 3.0).passed is False


@pytest.mark.parametrize("raw", [None, "", "abc", "nan", float("inf"), object()])
def test_unparseable_gpa_fails_closed(raw) -> None:
    result = check_gpa(raw, 3.0)

    assert result.passed is False
    assert result.evidence["student_gpa"] == 0.0
    assert result.fraction == Decimal("0")


def test_unparseable_requirement_coerces_to_zero() -> None:
    assert coerce_gpa("not-a-number") == 0.0
    assert coerce_gpa("3.8/4") == 0.0
    assert coerce_gpa(" 3.8 ") == 3.8
    assert check_gpa(2.0, None).passed is True


# ==================== Courses ====================


def test_courses_full_coverage_passes() -> None:
    records = [CourseRecord.from_value(c) for c in FULL_COURSE_LIST]

    result = check_courses(records, MANDATORY, 8)

    assert result.passed is True
    assert result.fraction == Decimal("1")
    assert result.evidence["total_courses"] == 8
    assert result.evidence["required_total"] == 8
    assert result.evidence["missing_mandatory_courses"] == []


def test_courses_missing_physics_and_too_few() -> None:
    records = courses("Biology", "Chemistry", "Mathematics", "English", "History", "Art", "Music")

    result = check_courses(records, MANDATORY, 8)

    assert result.passed is False
    assert result.reasons == [
        "Only 7 courses submitted, minimum 8 required",
        "Missing mandatory courses: Physics",
    ]
    assert result.evidence["missing_mandatory_courses"] == ["Physics"]
    assert result.fraction == Decimal("4") / Decimal("5")


def test_name_substring_matching_is_case_insensitive() -> None:
    records = courses("AP Biology", "honors CHEMISTRY", "Physics II", "Pre-Calculus Mathematics", "English Lit")

    result = check_courses(records, MANDATORY, 5)

    assert result.passed is True


def test_code_exact_matching_compares_codes() -> None:
    records = [CourseRecord(code="bio101", name="Biology"), CourseRecord(code="CHEM101", name="Chem")]

    result = check_courses(
        records, ["BIO101", "CHEM101", "PHYS101"], 2, mode=CourseMatchingMode.CODE_EXACT
    )

    assert result.passed is False
    assert result.evidence["missing_mandatory_courses"] == ["PHYS101"]
    assert result.evidence["matching"] == "code_exact"


def test_name_matching_falls_back_to_code() -> None:
    records = [CourseRecord(code="Biology-101")]

    assert check_courses(records, ["biology"], 1).passed is True


def test_duplicate_courses_count_toward_total() -> None:
    records = courses(*(["Biology"] * 8))

    result = check_courses(records, ["Biology"], 8)

    assert result.passed is True
    assert result.evidence["total_courses"] == 8


def test_without_mandatory_list_credit_scales_with_course_count() -> None:
    assert check_courses([], [], 0).fraction == Decimal("0")
    assert check_courses(courses("A", "B"), [], 0).fraction == Decimal("0.4")
    assert check_courses(courses("A", "B", "C", "D", "E", "F"), [], 0).fraction == Decimal("1")


# ==================== Documents ====================


def test_documents_all_required_approved() -> None:
    result = check_documents(
        {DocumentType.TRANSCRIPT, DocumentType.NATIONAL_ID, DocumentType.PHOTO, DocumentType.OTHER},
        [DocumentType.TRANSCRIPT, DocumentType.NATIONAL_ID, DocumentType.PHOTO],
    )

    assert result.passed is True
    assert result.evidence == {"missing_documents": []}


def test_documents_missing_listed_in_required_order() -> None:
    result = check_documents(
        {DocumentType.PHOTO},
        [DocumentType.TRANSCRIPT, DocumentType.NATIONAL_ID, DocumentType.PHOTO],
    )

    assert result.passed is False
    assert result.evidence["missing_documents"] == ["transcript", "national_id"]
    assert result.reasons == ["Missing required documents: transcript, national_id"]
    assert result.fraction == Decimal("1") / Decimal("3")


def test_no_required_documents_passes() -> None:
    result = check_documents(set(), [])

    assert result.passed is True
    assert result.fraction == Decimal("1")


# ==================== Completeness ====================


def test_completeness_full_partial_and_empty() -> None:
    full = check_completeness({"first_name": "A", "courses": [{"name": "Biology"}]})
    partial = check_completeness({"first_name": "A", "email": "  ", "courses": []})
    empty = check_completeness({"first_name": None, "courses": []})

    assert (full.passed, full.fraction) == (True, Decimal("1"))
    assert (partial.passed, partial.fraction) == (False, Decimal("0.5"))
    assert partial.evidence["missing_fields"] == ["email", "courses"]
    assert partial.reasons == ["Incomplete application, missing fields: email, courses"]
    assert (empty.passed, empty.fraction) == (False, Decimal("0"))
