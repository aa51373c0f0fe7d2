"""Application lifecycle: drafts, fee, submission with evaluation, withdrawal, decisions."""

import asyncio
import uuid

import pytest

from admissions.core.enums import (
    ApplicationStatus,
    Decision,
    EligibilityStatus,
    StatusUpdateMode,
)
from admissions.core.exceptions import (
    InvalidStatusTransitionError,
    NotFoundError,
    ValidationError,
)
from admissions.repositories import EligibilityResultRepository
from admissions.services.application_service import ApplicationService

from factories import application_fields, seed_program


def run_with_service(session_factory, steps, program_kwargs=None):
    """Seed a program, then run steps(service, program) inside one session."""

    async def scenario():
        async with session_factory() as session:
            program = await seed_program(session, **(program_kwargs or {}))
            return await steps(ApplicationService(session), program)

    return asyncio.run(scenario())


async def create_draft(service, program, **overrides):
    data = application_fields(**overrides)
    data["program_id"] = program.id
    return await service.create_application(user_id=uuid.uuid4(), data=data)


def test_create_application_starts_as_pending_draft(session_factory) -> None:
    async def steps(service, program):
        return await create_draft(service, program)

    application = run_with_service(session_factory, steps)

    assert application.status == ApplicationStatus.DRAFT
    assert application.decision == Decision.PENDING
    assert application.fee_paid is False
    assert application.submitted_at is None


def test_create_application_for_unknown_program_is_not_found(session_factory) -> None:
    async def steps(service, program):
        await service.create_application(
            user_id=uuid.uuid4(), data={"program_id": uuid.uuid4()}
        )

    with pytest.raises(NotFoundError):
        run_with_service(session_factory, steps)


def test_create_application_for_inactive_program_is_rejected(session_factory) -> None:
    async def steps(service, program):
        await create_draft(service, program)

    with pytest.raises(ValidationError) as exc_info:
        run_with_service(session_factory, steps, {"code": "ARCH", "active": False})

    assert exc_info.value.message == "Program ARCH is not accepting applications"


def test_submit_requires_paid_fee(session_factory) -> None:
    async def steps(service, program):
        draft = await create_draft(service, program)
        await service.submit_application(draft.id)

    with pytest.raises(ValidationError) as exc_info:
        run_with_service(session_factory, steps)

    assert exc_info.value.message == "Application fee must be paid before submission"


def test_submit_without_fee_when_not_required(session_factory, workflow_settings) -> None:
    workflow_settings(SUBMISSION_REQUIRES_FEE=False, AUTO_EVALUATE_ON_SUBMIT=False)

    async def steps(service, program):
        draft = await create_draft(service, program)
        return await service.submit_application(draft.id)

    application = run_with_service(session_factory, steps)

    assert application.status == ApplicationStatus.SUBMITTED


def test_submit_reports_missing_fields(session_factory) -> None:
    async def steps(service, program):
        draft = await service.create_application(
            user_id=uuid.uuid4(),
            data={"program_id": program.id, "first_name": "Amina", "last_name": "Yusuf"},
        )
        await service.pay_fee(draft.id)
        await service.submit_application(draft.id)

    with pytest.raises(ValidationError) as exc_info:
        run_with_service(session_factory, steps)

    assert exc_info.value.message == (
        "Missing required fields: email, date_of_birth, gender, nationality, "
        "national_id, entry_year, entry_semester"
    )


def test_pay_fee_generates_reference_once(session_factory) -> None:
    async def steps(service, program):
        draft = await create_draft(service, program)
        paid = await service.pay_fee(draft.id)
        reference = paid.payment_reference
        with pytest.raises(ValidationError) as exc_info:
            await service.pay_fee(draft.id)
        return paid, reference, exc_info.value

    paid, reference, error = run_with_service(session_factory, steps)

    assert paid.fee_paid is True
    assert reference.startswith("PAY-")
    assert len(reference) == 16
    assert error.message == "Application fee already paid"


def test_submit_evaluates_and_recommends(session_factory) -> None:
    async def steps(service, program):
        draft = await create_draft(service, program)
        await service.pay_fee(draft.id, payment_reference="BANK-778")
        submitted = await service.submit_application(draft.id)
        result = await EligibilityResultRepository(service.db).get_by_application(draft.id)
        return submitted, result

    submitted, result = run_with_service(session_factory, steps)

    assert submitted.status == ApplicationStatus.SUBMITTED
    assert submitted.submitted_at is not None
    assert submitted.payment_reference == "BANK-778"
    assert result.status == EligibilityStatus.ELIGIBLE
    assert result.recommended_status == ApplicationStatus.ACCEPTED
    assert result.evaluated_by == "system"


def test_submit_with_auto_decide_sets_final_status(session_factory, workflow_settings) -> None:
    workflow_settings(ELIGIBILITY_STATUS_MODE=StatusUpdateMode.AUTO_DECIDE)

    async def steps(service, program):
        draft = await create_draft(service, program, high_school_gpa=None, courses=[])
        await service.pay_fee(draft.id)
        return await service.submit_application(draft.id)

    application = run_with_service(session_factory, steps)

    assert application.status == ApplicationStatus.REJECTED


def test_submit_without_auto_evaluation_stores_no_result(session_factory, workflow_settings) -> None:
    workflow_settings(AUTO_EVALUATE_ON_SUBMIT=False)

    async def steps(service, program):
        draft = await create_draft(service, program)
        await service.pay_fee(draft.id)
        await service.submit_application(draft.id)
        return await EligibilityResultRepository(service.db).get_by_application(draft.id)

    assert run_with_service(session_factory, steps) is None


def test_failed_auto_evaluation_keeps_submission(session_factory, monkeypatch) -> None:
    async def broken_evaluate(self, application_id, evaluated_by="system"):
        raise RuntimeError("engine offline")

    monkeypatch.setattr(
        "admissions.services.application_service.EligibilityService.evaluate",
        broken_evaluate,
    )

    async def steps(service, program):
        draft = await create_draft(service, program)
        await service.pay_fee(draft.id)
        return await service.submit_application(draft.id)

    application = run_with_service(session_factory, steps)

    assert application.status == ApplicationStatus.SUBMITTED


def test_submitted_application_is_frozen(session_factory) -> None:
    async def steps(service, program):
        draft = await create_draft(service, program)
        await service.pay_fee(draft.id)
        await service.submit_application(draft.id)
        errors = []
        for attempt in (
            service.submit_application(draft.id),
            service.update_application(draft.id, {"first_name": "Changed"}),
        ):
            with pytest.raises(ValidationError) as exc_info:
                await attempt
            errors.append(exc_info.value.message)
        return errors

    errors = run_with_service(session_factory, steps)

    assert errors == ["Application already submitted", "Cannot update submitted application"]


def test_update_draft_changes_only_given_fields(session_factory) -> None:
    async def steps(service, program):
        draft = await create_draft(service, program)
        return await service.update_application(draft.id, {"city": "Mombasa"})

    application = run_with_service(session_factory, steps)

    assert application.city == "Mombasa"
    assert application.first_name == "Amina"


def test_withdraw_is_terminal(session_factory) -> None:
    async def steps(service, program):
        draft = await create_draft(service, program)
        withdrawn = await service.withdraw_application(draft.id)
        status = withdrawn.status
        with pytest.raises(InvalidStatusTransitionError):
            await service.withdraw_application(draft.id)
        return status

    assert run_with_service(session_factory, steps) == ApplicationStatus.WITHDRAWN


def test_decision_requires_review(session_factory) -> None:
    async def steps(service, program):
        draft = await create_draft(service, program)
        await service.pay_fee(draft.id)
        await service.submit_application(draft.id)

        with pytest.raises(InvalidStatusTransitionError):
            await service.make_decision(draft.id, Decision.ACCEPTED, decided_by="staff-1")

        await service.update_application_status(
            draft.id, ApplicationStatus.UNDER_REVIEW, changed_by="staff-1"
        )
        waitlisted = await service.make_decision(
            draft.id, Decision.WAITLISTED, decided_by="staff-1", notes="Strong, cohort full"
        )
        waitlisted_state = (waitlisted.status, waitlisted.decision)
        accepted = await service.make_decision(draft.id, Decision.ACCEPTED, decided_by="staff-2")
        return waitlisted_state, accepted

    (status, decision), accepted = run_with_service(session_factory, steps)

    assert status == ApplicationStatus.UNDER_REVIEW
    assert decision == Decision.WAITLISTED
    assert accepted.status == ApplicationStatus.ACCEPTED
    assert accepted.decision == Decision.ACCEPTED
    assert accepted.decision_by == "staff-2"
    assert accepted.reviewed_by == "staff-2"


def test_pending_is_not_a_decision(session_factory) -> None:
    async def steps(service, program):
        draft = await create_draft(service, program)
        await service.make_decision(draft.id, Decision.PENDING, decided_by="staff-1")

    with pytest.raises(ValidationError) as exc_info:
        run_with_service(session_factory, steps)

    assert exc_info.value.message == "Invalid decision"


def test_list_applications_filters_by_status(session_factory) -> None:
    async def steps(service, program):
        first = await create_draft(service, program)
        await create_draft(service, program)
        await service.withdraw_application(first.id)
        _, draft_total = await service.list_applications(status=ApplicationStatus.DRAFT)
        everything, total = await service.list_applications(page=1, page_size=1)
        return draft_total, total, len(everything)

    assert run_with_service(session_factory, steps) == (1, 2, 1)
