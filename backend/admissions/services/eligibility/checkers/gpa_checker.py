"""GPA-versus-threshold checker."""

import math
from decimal import Decimal
from typing import Any

from admissions.core.enums import CriterionType
from admissions.services.eligibility.base import CriterionResult


def coerce_gpa(value: Any) -> float:
    """
    Parse a GPA-like value, treating anything unparseable as 0.0.

    Missing GPAs fail closed against any positive threshold.
    """
    if value is None:
        return 0.0
    # Whole-value parse: "3.8/4" is unparseable and fails closed, no leading-number salvage
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(parsed) or math.isinf(parsed):
        return 0.0
    return parsed


def check_gpa(student_gpa: Any, required_gpa: Any) -> CriterionResult:
    """
    Compare the student's GPA with the program minimum.

    No rounding is applied; the comparison is on the raw parsed floats.

    Args:
        student_gpa: Student GPA (number, numeric string or None)
        required_gpa: Minimum GPA (number, numeric string or None)

    Returns:
        CriterionResult with evidence {student_gpa, required_gpa}; partial
        credit is the ratio of student to required GPA
    """
    gpa = coerce_gpa(student_gpa)
    required = coerce_gpa(required_gpa)
    passed = gpa >= required

    if passed or required <= 0:
        fraction = Decimal("1")
    else:
        fraction = Decimal(str(gpa)) / Decimal(str(required))

    reasons = []
    if not passed:
        reasons.append(f"GPA {gpa:.2f} is below minimum {required:.2f}")

    return CriterionResult(
        criterion=CriterionType.GPA,
        passed=passed,
        fraction=fraction,
        reasons=reasons,
        evidence={
            "student_gpa": gpa,
            "required_gpa": required,
        },
    )
