"""Application completeness checker."""

from decimal import Decimal
from typing import Any, Mapping

from admissions.core.enums import CriterionType
from admissions.services.eligibility.base import CriterionResult, join_names


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def check_completeness(profile: Mapping[str, Any]) -> CriterionResult:
    """
    Check that the core personal and academic fields are filled in.

    All fields present earns full credit, some present earns half, none earns zero.

    Args:
        profile: Field name to value mapping

    Returns:
        CriterionResult with evidence {missing_fields}
    """
    missing = [name for name, value in profile.items() if not _is_present(value)]
    passed = not missing

    if passed:
        fraction = Decimal("1")
    elif len(missing) < len(profile):
        fraction = Decimal("0.5")
    else:
        fraction = Decimal("0")

    reasons = []
    if missing:
        reasons.append(f"Incomplete application, missing fields: {join_names(missing)}")

    return CriterionResult(
        criterion=CriterionType.COMPLETENESS,
        passed=passed,
        fraction=fraction,
        reasons=reasons,
        evidence={"missing_fields": missing},
    )
