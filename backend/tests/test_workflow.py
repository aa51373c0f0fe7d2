"""Application status transition table."""

import pytest

from admissions.core.enums import ApplicationStatus
from admissions.core.exceptions import InvalidStatusTransitionError, ValidationError
from admissions.core.workflow import (
    STATUS_TRANSITIONS,
    TERMINAL_STATUSES,
    can_transition,
    ensure_transition,
)


def test_every_status_has_an_entry() -> None:
    assert set(STATUS_TRANSITIONS) == set(ApplicationStatus)


def test_terminal_statuses() -> None:
    assert TERMINAL_STATUSES == {
        ApplicationStatus.ACCEPTED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.WITHDRAWN,
    }


@pytest.mark.parametrize(
    "current, target",
    [
        (ApplicationStatus.DRAFT, ApplicationStatus.SUBMITTED),
        (ApplicationStatus.SUBMITTED, ApplicationStatus.UNDER_REVIEW),
        (ApplicationStatus.UNDER_REVIEW, ApplicationStatus.ACCEPTED),
        (ApplicationStatus.UNDER_REVIEW, ApplicationStatus.PENDING_DOCUMENTS),
        (ApplicationStatus.PENDING_DOCUMENTS, ApplicationStatus.UNDER_REVIEW),
        (ApplicationStatus.PENDING_DOCUMENTS, ApplicationStatus.WITHDRAWN),
    ],
)
def test_allowed_transitions(current, target) -> None:
    assert can_transition(current, target)
    ensure_transition(current, target)


@pytest.mark.parametrize(
    "current, target",
    [
        (ApplicationStatus.DRAFT, ApplicationStatus.ACCEPTED),
        (ApplicationStatus.SUBMITTED, ApplicationStatus.REJECTED),
        (ApplicationStatus.ACCEPTED, ApplicationStatus.UNDER_REVIEW),
        (ApplicationStatus.WITHDRAWN, ApplicationStatus.SUBMITTED),
        (ApplicationStatus.UNDER_REVIEW, ApplicationStatus.DRAFT),
    ],
)
def test_rejected_transitions(current, target) -> None:
    assert not can_transition(current, target)
    with pytest.raises(InvalidStatusTransitionError) as exc_info:
        ensure_transition(current, target)

    assert exc_info.value.message == (
        f"Cannot change application status from '{current.value}' to '{target.value}'"
    )


def test_invalid_transition_is_a_client_error() -> None:
    with pytest.raises(ValidationError) as exc_info:
        ensure_transition(ApplicationStatus.REJECTED, ApplicationStatus.ACCEPTED)

    assert exc_info.value.status_code == 400
    assert exc_info.value.retryable is False
