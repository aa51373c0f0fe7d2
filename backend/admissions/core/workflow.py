"""Application status transition table."""

from admissions.core.enums import ApplicationStatus, EligibilityStatus
from admissions.core.exceptions import InvalidStatusTransitionError

STATUS_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.DRAFT: frozenset(
        {ApplicationStatus.SUBMITTED, ApplicationStatus.WITHDRAWN}
    ),
    ApplicationStatus.SUBMITTED: frozenset(
        {ApplicationStatus.UNDER_REVIEW, ApplicationStatus.WITHDRAWN}
    ),
    ApplicationStatus.UNDER_REVIEW: frozenset(
        {
            ApplicationStatus.PENDING_DOCUMENTS,
            ApplicationStatus.ACCEPTED,
            ApplicationStatus.REJECTED,
            ApplicationStatus.WITHDRAWN,
        }
    ),
    ApplicationStatus.PENDING_DOCUMENTS: frozenset(
        {ApplicationStatus.UNDER_REVIEW, ApplicationStatus.WITHDRAWN}
    ),
    ApplicationStatus.ACCEPTED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
    ApplicationStatus.WITHDRAWN: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in STATUS_TRANSITIONS.items() if not targets
)

# Statuses an automatic eligibility decision may overwrite
AUTO_DECIDABLE_STATUSES = frozenset(
    {
        ApplicationStatus.SUBMITTED,
        ApplicationStatus.UNDER_REVIEW,
        ApplicationStatus.PENDING_DOCUMENTS,
    }
)

VERDICT_TO_APPLICATION_STATUS: dict[EligibilityStatus, ApplicationStatus] = {
    EligibilityStatus.ELIGIBLE: ApplicationStatus.ACCEPTED,
    EligibilityStatus.NOT_ELIGIBLE: ApplicationStatus.REJECTED,
    EligibilityStatus.PENDING_REVIEW: ApplicationStatus.UNDER_REVIEW,
}


def can_transition(current: ApplicationStatus, target: ApplicationStatus) -> bool:
    """Return True if the transition table allows current -> target."""
    return target in STATUS_TRANSITIONS.get(current, frozenset())


def ensure_transition(current: ApplicationStatus, target: ApplicationStatus) -> None:
    """
    Validate a status change against the transition table.

    Raises:
        InvalidStatusTransitionError: If the change is not allowed
    """
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(
            f"Cannot change application status from '{current.value}' to '{target.value}'"
        )
