"""Document completeness checker."""

from decimal import Decimal
from typing import Iterable, Sequence, Union

from admissions.core.enums import CriterionType, DocumentType
from admissions.services.eligibility.base import CriterionResult, join_names


def _type_value(doc_type: Union[DocumentType, str]) -> str:
    return doc_type.value if isinstance(doc_type, DocumentType) else str(doc_type)


def check_documents(
    approved_types: Iterable[Union[DocumentType, str]],
    required_types: Sequence[Union[DocumentType, str]],
) -> CriterionResult:
    """
    Check that every required document type has at least one approved upload.

    Args:
        approved_types: Types with at least one approved document
        required_types: Types the program requires

    Returns:
        CriterionResult with evidence {missing_documents} listed in required order
    """
    approved = {_type_value(t) for t in approved_types}
    missing = [_type_value(t) for t in required_types if _type_value(t) not in approved]
    passed = not missing

    if required_types:
        fraction = Decimal(len(required_types) - len(missing)) / Decimal(len(required_types))
    else:
        fraction = Decimal("1")

    reasons = []
    if missing:
        reasons.append(f"Missing required documents: {join_names(missing)}")

    return CriterionResult(
        criterion=CriterionType.DOCUMENTS,
        passed=passed,
        fraction=fraction,
        reasons=reasons,
        evidence={"missing_documents": missing},
    )
