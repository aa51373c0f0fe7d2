"""Rule engine policies: weighted score, boolean gating, outcomes and determinism."""

import uuid
from datetime import date
from decimal import Decimal

from admissions.core.enums import (
    ApplicationStatus,
    CourseMatchingMode,
    DocumentType,
    EligibilityStatus,
    EvaluationPolicyType,
    StatusUpdateMode,
)
from admissions.services.eligibility import (
    ApplicationSnapshot,
    AutoDecision,
    CourseRecord,
    EvaluationConfig,
    ProgramRequirements,
    Recommendation,
    RuleEngine,
)
from admissions.services.eligibility.base import CORE_PROFILE_FIELDS

from factories import ALL_DOCUMENTS, FULL_COURSE_LIST

SUCCESS = ["All eligibility criteria met"]


def make_snapshot(gpa="3.8", courses=FULL_COURSE_LIST, complete=True) -> ApplicationSnapshot:
    profile = {name: "x" for name in CORE_PROFILE_FIELDS}
    profile["date_of_birth"] = date(2006, 1, 1)
    profile["courses"] = list(courses)
    if not complete:
        profile["national_id"] = None
    return ApplicationSnapshot(
        application_id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        program_id=uuid.uuid4(),
        status=ApplicationStatus.SUBMITTED,
        gpa=gpa,
        courses=tuple(CourseRecord.from_value(c) for c in courses),
        fee_paid=True,
        profile=profile,
    )


def default_requirements(engine: RuleEngine) -> ProgramRequirements:
    return engine.resolve_requirements(uuid.uuid4(), None)


def test_end_to_end_weighted_policy_is_eligible() -> None:
    engine = RuleEngine(EvaluationConfig())

    verdict = engine.evaluate(make_snapshot(), default_requirements(engine), ALL_DOCUMENTS)

    assert verdict.policy == EvaluationPolicyType.WEIGHTED
    assert verdict.status == EligibilityStatus.ELIGIBLE
    assert verdict.score == Decimal("100.00")
    assert verdict.reasons == SUCCESS


def test_end_to_end_boolean_policy_is_eligible() -> None:
    engine = RuleEngine(EvaluationConfig(policy=EvaluationPolicyType.BOOLEAN))

    verdict = engine.evaluate(make_snapshot(), default_requirements(engine), ALL_DOCUMENTS)

    assert verdict.status == EligibilityStatus.ELIGIBLE
    assert verdict.score is None
    assert verdict.reasons == SUCCESS
    assert set(verdict.criteria_checked) == {"gpa_check", "courses_check", "documents_check"}


def test_boolean_policy_accumulates_reasons_in_check_order() -> None:
    engine = RuleEngine(EvaluationConfig(policy=EvaluationPolicyType.BOOLEAN))
    courses = [c for c in FULL_COURSE_LIST if c["name"] != "Physics"]

    verdict = engine.evaluate(
        make_snapshot(gpa="2.5", courses=courses),
        default_requirements(engine),
        [DocumentType.TRANSCRIPT, DocumentType.PHOTO],
    )

    assert verdict.status == EligibilityStatus.NOT_ELIGIBLE
    assert verdict.reasons == [
        "GPA 2.50 is below minimum 3.00",
        "Only 7 courses submitted, minimum 8 required",
        "Missing mandatory courses: Physics",
        "Missing required documents: national_id",
    ]


def test_documents_gating_flips_when_missing_type_is_approved() -> None:
    engine = RuleEngine(EvaluationConfig(policy=EvaluationPolicyType.BOOLEAN))
    snapshot = make_snapshot()
    requirements = default_requirements(engine)

    before = engine.evaluate(snapshot, requirements, [DocumentType.TRANSCRIPT, DocumentType.PHOTO])
    after = engine.evaluate(snapshot, requirements, ALL_DOCUMENTS)

    assert before.criteria_checked["documents_check"] == {
        "passed": False,
        "missing_documents": ["national_id"],
    }
    assert after.criteria_checked["documents_check"]["passed"] is True
    assert after.status == EligibilityStatus.ELIGIBLE


def test_weighted_policy_ignores_documents_by_default_but_records_them() -> None:
    engine = RuleEngine(EvaluationConfig())

    verdict = engine.evaluate(make_snapshot(), default_requirements(engine), [])

    assert verdict.status == EligibilityStatus.ELIGIBLE
    assert verdict.criteria_checked["documents_check"]["passed"] is False
    assert "points" not in verdict.criteria_checked["documents_check"]
    assert verdict.criteria_checked["gpa_check"]["points"] == 40.0
    assert verdict.criteria_checked["gpa_check"]["weight"] == 40.0


def test_weighted_policy_folds_in_documents_when_weighted() -> None:
    config = EvaluationConfig(documents_weight=Decimal("20"))
    engine = RuleEngine(config)

    verdict = engine.evaluate(make_snapshot(), default_requirements(engine), [])

    # 100 of 120 possible points
    assert verdict.score == Decimal("83.33")
    assert verdict.reasons[0] == (
        "Missing required documents: transcript, national_id, photo"
    )


def test_weighted_policy_review_band() -> None:
    engine = RuleEngine(EvaluationConfig())
    courses = [c for c in FULL_COURSE_LIST if c["name"] not in ("Physics", "Chemistry")]

    # GPA 2.4/3.0 -> 32 points, courses 3/5 -> 24 points, partial profile -> 10 points
    verdict = engine.evaluate(
        make_snapshot(gpa="2.4", courses=courses, complete=False),
        default_requirements(engine),
        ALL_DOCUMENTS,
    )

    assert verdict.score == Decimal("66.00")
    assert verdict.status == EligibilityStatus.PENDING_REVIEW
    assert verdict.reasons[-1].startswith("Eligibility score 66.00 requires manual review")


def test_weighted_policy_not_eligible_with_missing_gpa() -> None:
    engine = RuleEngine(EvaluationConfig())

    verdict = engine.evaluate(
        make_snapshot(gpa=None, courses=[]),
        default_requirements(engine),
        ALL_DOCUMENTS,
    )

    assert verdict.status == EligibilityStatus.NOT_ELIGIBLE
    assert verdict.reasons[0] == "GPA 0.00 is below minimum 3.00"


def test_program_requirements_override_defaults() -> None:
    engine = RuleEngine(EvaluationConfig(policy=EvaluationPolicyType.BOOLEAN))

    class Row:
        min_gpa = Decimal("3.50")
        mandatory_courses = []
        required_documents = None

    requirements = engine.resolve_requirements(uuid.uuid4(), Row())
    verdict = engine.evaluate(make_snapshot(gpa="3.4"), requirements, ALL_DOCUMENTS)

    assert requirements.mandatory_courses == ()
    assert requirements.required_documents == tuple(ALL_DOCUMENTS)
    assert verdict.reasons == ["GPA 3.40 is below minimum 3.50"]


def test_code_exact_matching_rejects_named_course_with_other_code() -> None:
    engine = RuleEngine(
        EvaluationConfig(
            policy=EvaluationPolicyType.BOOLEAN,
            course_matching=CourseMatchingMode.CODE_EXACT,
            mandatory_courses=("BIO101",),
            required_total_courses=1,
        )
    )
    snapshot = make_snapshot(courses=[{"code": "BIO-301", "name": "AP Biology"}])

    verdict = engine.evaluate(snapshot, default_requirements(engine), ALL_DOCUMENTS)

    assert verdict.reasons == ["Missing mandatory courses: BIO101"]


def test_evaluation_is_deterministic() -> None:
    engine = RuleEngine(EvaluationConfig())
    snapshot = make_snapshot(gpa="2.9", courses=FULL_COURSE_LIST[:6])
    requirements = default_requirements(engine)

    first = engine.evaluate(snapshot, requirements, [DocumentType.PHOTO])
    second = engine.evaluate(snapshot, requirements, [DocumentType.PHOTO])

    assert first.status == second.status
    assert first.score == second.score
    assert first.reasons == second.reasons
    assert first.criteria_checked == second.criteria_checked


def test_outcome_follows_status_mode() -> None:
    snapshot = make_snapshot(gpa="1.0", courses=[], complete=False)

    outcomes = {}
    for mode in StatusUpdateMode:
        engine = RuleEngine(EvaluationConfig(status_mode=mode))
        verdict = engine.evaluate(snapshot, default_requirements(engine), [])
        outcomes[mode] = engine.derive_outcome(verdict)

    assert outcomes[StatusUpdateMode.AUTO_DECIDE] == AutoDecision(ApplicationStatus.REJECTED)
    assert outcomes[StatusUpdateMode.RECOMMEND] == Recommendation(ApplicationStatus.REJECTED)
    assert outcomes[StatusUpdateMode.NONE] is None


def test_describe_requirements_lists_configured_rules() -> None:
    description = RuleEngine(EvaluationConfig()).describe_requirements()

    assert description["policy"] == "weighted"
    assert description["mandatory_courses"] == [
        "Biology", "Chemistry", "Physics", "Mathematics", "English"
    ]
    assert description["required_documents"] == ["transcript", "national_id", "photo"]
    assert description["thresholds"] == {"eligible": 80.0, "review": 60.0}
