"""Course coverage checker."""

from decimal import Decimal
from typing import Iterable, Sequence

from admissions.core.enums import CourseMatchingMode, CriterionType
from admissions.services.eligibility.base import CourseRecord, CriterionResult, join_names


def course_satisfies(
    course: CourseRecord,
    requirement: str,
    mode: CourseMatchingMode,
) -> bool:
    """
    Check whether one student course satisfies one mandatory requirement.

    NAME_SUBSTRING: the requirement appears, case-insensitively, inside the
    course name (or the code when the course has no name).
    CODE_EXACT: the course code equals the requirement, case-insensitively.
    """
    needle = requirement.strip().lower()
    if not needle:
        return True

    if mode == CourseMatchingMode.CODE_EXACT:
        return (course.code or "").strip().lower() == needle

    haystack = (course.name or course.code or "").lower()
    return needle in haystack


def find_missing_courses(
    courses: Sequence[CourseRecord],
    mandatory: Iterable[str],
    mode: CourseMatchingMode,
) -> list[str]:
    """Return mandatory requirements not satisfied by any course, in requirement order."""
    return [
        requirement
        for requirement in mandatory
        if not any(course_satisfies(course, requirement, mode) for course in courses)
    ]


def check_courses(
    courses: Sequence[CourseRecord],
    mandatory_courses: Sequence[str],
    required_total: int,
    mode: CourseMatchingMode = CourseMatchingMode.NAME_SUBSTRING,
    full_credit_count: int = 5,
) -> CriterionResult:
    """
    Check course count and mandatory-course coverage.

    Passes only if the student lists at least required_total courses and
    every mandatory course is matched.

    Partial credit: with mandatory courses declared, the fraction of them
    covered; otherwise course count relative to full_credit_count.

    Args:
        courses: Student courses, duplicates allowed
        mandatory_courses: Required course names or codes
        required_total: Minimum number of courses
        mode: How mandatory courses are matched
        full_credit_count: Course count that earns full credit without a mandatory list

    Returns:
        CriterionResult with evidence {total_courses, required_total,
        missing_mandatory_courses}
    """
    total = len(courses)
    missing = find_missing_courses(courses, mandatory_courses, mode)
    has_sufficient = total >= required_total
    passed = has_sufficient and not missing

    if mandatory_courses:
        covered = len(mandatory_courses) - len(missing)
        fraction = Decimal(covered) / Decimal(len(mandatory_courses))
    elif full_credit_count > 0:
        fraction = Decimal(min(total, full_credit_count)) / Decimal(full_credit_count)
    else:
        fraction = Decimal("1")

    reasons = []
    if not has_sufficient:
        reasons.append(f"Only {total} courses submitted, minimum {required_total} required")
    if missing:
        reasons.append(f"Missing mandatory courses: {join_names(missing)}")

    return CriterionResult(
        criterion=CriterionType.COURSES,
        passed=passed,
        fraction=fraction,
        reasons=reasons,
        evidence={
            "total_courses": total,
            "required_total": required_total,
            "missing_mandatory_courses": missing,
            "matching": mode.value,
        },
    )
