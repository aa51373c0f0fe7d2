"""Eligibility engine foundation: configuration, evaluation inputs, results and policy base."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional, Sequence, Union
from uuid import UUID

from admissions.core.enums import (
    ApplicationStatus,
    CourseMatchingMode,
    CriterionType,
    DocumentType,
    EligibilityStatus,
    EvaluationPolicyType,
    StatusUpdateMode,
)

SUCCESS_REASON = "All eligibility criteria met"

# Profile fields that count toward application completeness
CORE_PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "date_of_birth",
    "nationality",
    "national_id",
    "high_school_name",
    "high_school_gpa",
    "courses",
)


@dataclass(frozen=True)
class EvaluationConfig:
    """
    Tunable rule-engine configuration.

    Built once from settings and passed to the engine at construction, so
    evaluation never reads ambient state. Defaults mirror the university-wide
    requirements of the pass/fail rule set.
    """

    policy: EvaluationPolicyType = EvaluationPolicyType.WEIGHTED
    course_matching: CourseMatchingMode = CourseMatchingMode.NAME_SUBSTRING
    status_mode: StatusUpdateMode = StatusUpdateMode.RECOMMEND
    default_min_gpa: Decimal = Decimal("3.00")
    gpa_scale: Decimal = Decimal("4.00")
    mandatory_courses: tuple[str, ...] = (
        "Biology",
        "Chemistry",
        "Physics",
        "Mathematics",
        "English",
    )
    required_total_courses: int = 8
    full_credit_course_count: int = 5
    required_documents: tuple[DocumentType, ...] = (
        DocumentType.TRANSCRIPT,
        DocumentType.NATIONAL_ID,
        DocumentType.PHOTO,
    )
    gpa_weight: Decimal = Decimal("40")
    courses_weight: Decimal = Decimal("40")
    completeness_weight: Decimal = Decimal("20")
    documents_weight: Decimal = Decimal("0")
    eligible_threshold: Decimal = Decimal("80")
    review_threshold: Decimal = Decimal("60")

    def __post_init__(self):
        if self.review_threshold > self.eligible_threshold:
            raise ValueError("review_threshold must not exceed eligible_threshold")
        total = self.gpa_weight + self.courses_weight + self.completeness_weight + self.documents_weight
        if total <= 0:
            raise ValueError("At least one criterion weight must be positive")

    def weight_for(self, criterion: CriterionType) -> Decimal:
        """Return the weighted-policy weight of a criterion."""
        return {
            CriterionType.GPA: self.gpa_weight,
            CriterionType.COURSES: self.courses_weight,
            CriterionType.DOCUMENTS: self.documents_weight,
            CriterionType.COMPLETENESS: self.completeness_weight,
        }[criterion]


@dataclass(frozen=True)
class CourseRecord:
    """A course listed on the applicant's academic record."""

    code: Optional[str] = None
    name: Optional[str] = None
    grade: Optional[str] = None

    @classmethod
    def from_value(cls, value: Any) -> "CourseRecord":
        """Build a course from a stored dict or a bare course name."""
        if isinstance(value, CourseRecord):
            return value
        if isinstance(value, dict):
            return cls(
                code=value.get("code"),
                name=value.get("name"),
                grade=value.get("grade"),
            )
        return cls(name=str(value))


@dataclass(frozen=True)
class ApplicationSnapshot:
    """
    Point-in-time, read-only view of an application used as evaluation input.

    Attributes:
        application_id: The application being evaluated
        user_id: Owning applicant
        program_id: Program applied to
        status: Application status at snapshot time
        gpa: GPA on the engine's configured scale (None if not reported)
        courses: Courses in submission order, duplicates preserved
        fee_paid: Whether the application fee flag is set
        submitted_at: Submission timestamp
        profile: Core profile field values used for completeness scoring
    """

    application_id: UUID
    user_id: UUID
    program_id: UUID
    status: ApplicationStatus
    gpa: Optional[Any]
    courses: tuple[CourseRecord, ...] = ()
    fee_paid: bool = False
    submitted_at: Optional[datetime] = None
    profile: dict = field(default_factory=dict)

    @classmethod
    def from_application(cls, application: Any, gpa_scale: Decimal) -> "ApplicationSnapshot":
        """
        Build a snapshot from an application record, normalising the GPA.

        Args:
            application: Application ORM instance (or any object with the same attributes)
            gpa_scale: Scale the engine evaluates GPA on (e.g., 4.00)

        Returns:
            ApplicationSnapshot with GPA expressed on gpa_scale
        """
        return cls(
            application_id=application.id,
            user_id=application.user_id,
            program_id=application.program_id,
            status=application.status,
            gpa=normalize_gpa(
                application.high_school_gpa,
                getattr(application, "gpa_scale", None),
                gpa_scale,
            ),
            courses=tuple(CourseRecord.from_value(c) for c in (application.courses or [])),
            fee_paid=bool(application.fee_paid),
            submitted_at=application.submitted_at,
            profile={name: getattr(application, name, None) for name in CORE_PROFILE_FIELDS},
        )


def normalize_gpa(
    gpa: Optional[Any],
    source_scale: Optional[Any],
    target_scale: Decimal,
) -> Optional[Any]:
    """
    Express a GPA on the target scale.

    Values that are not numeric are passed through untouched so that the GPA
    checker can apply its fail-closed coercion.
    """
    if gpa is None or source_scale is None:
        return gpa
    try:
        value = Decimal(str(gpa))
        source = Decimal(str(source_scale))
    except (ArithmeticError, ValueError):
        return gpa
    if source <= 0 or source == target_scale:
        return value
    return value * target_scale / source


@dataclass(frozen=True)
class ProgramRequirements:
    """
    Requirements an application is evaluated against.

    Attributes:
        program_id: Program the requirements belong to
        min_gpa: Minimum GPA on the engine's scale
        mandatory_courses: Course names or codes that must be present
        required_documents: Document types that need an approved upload
        uses_defaults: True when no explicit requirement row existed
    """

    program_id: Optional[UUID]
    min_gpa: Decimal
    mandatory_courses: tuple[str, ...]
    required_documents: tuple[DocumentType, ...]
    uses_defaults: bool = False

    @classmethod
    def resolve(
        cls,
        program_id: Optional[UUID],
        requirement: Optional[Any],
        config: EvaluationConfig,
    ) -> "ProgramRequirements":
        """
        Merge a program's requirement row with configured defaults.

        A missing row, or a NULL column on an existing row, falls back to the
        default for that axis.
        """
        if requirement is None:
            return cls(
                program_id=program_id,
                min_gpa=config.default_min_gpa,
                mandatory_courses=tuple(config.mandatory_courses),
                required_documents=tuple(config.required_documents),
                uses_defaults=True,
            )

        min_gpa = requirement.min_gpa
        mandatory = requirement.mandatory_courses
        documents = requirement.required_documents

        return cls(
            program_id=program_id,
            min_gpa=Decimal(str(min_gpa)) if min_gpa is not None else config.default_min_gpa,
            mandatory_courses=tuple(mandatory) if mandatory is not None else tuple(config.mandatory_courses),
            required_documents=(
                tuple(DocumentType(d) for d in documents)
                if documents is not None
                else tuple(config.required_documents)
            ),
            uses_defaults=False,
        )


@dataclass
class CriterionResult:
    """
    Outcome of one criteria checker.

    Attributes:
        criterion: Which axis was checked
        passed: Whether the axis is satisfied
        fraction: Partial credit between 0 and 1 used by the weighted policy
        reasons: Human-readable failure explanations (empty when passed)
        evidence: Structured actual vs. required values
    """

    criterion: CriterionType
    passed: bool
    fraction: Decimal = field(default=Decimal("0"))
    reasons: list[str] = field(default_factory=list)
    evidence: dict = field(default_factory=dict)

    def __post_init__(self):
        """Ensure fraction is a Decimal clamped to [0, 1]."""
        if not isinstance(self.fraction, Decimal):
            self.fraction = Decimal(str(self.fraction))
        self.fraction = min(max(self.fraction, Decimal("0")), Decimal("1"))

    def to_dict(self) -> dict:
        """Serialise for the criteria_checked breakdown."""
        return {"passed": self.passed, **self.evidence}


@dataclass(frozen=True)
class EvaluationContext:
    """Everything a policy needs to produce a verdict."""

    snapshot: ApplicationSnapshot
    requirements: ProgramRequirements
    approved_document_types: frozenset[DocumentType]
    config: EvaluationConfig


@dataclass
class Verdict:
    """
    Output of one evaluation.

    Attributes:
        status: Eligibility verdict
        reasons: Ordered explanations, never empty
        criteria: Per-criterion results in evaluation order
        policy: Policy that produced the verdict
        score: 0-100 score under the weighted policy, None otherwise
        points: Per-criterion points earned under the weighted policy
    """

    status: EligibilityStatus
    reasons: list[str]
    criteria: dict[CriterionType, CriterionResult]
    policy: EvaluationPolicyType
    score: Optional[Decimal] = None
    points: dict[CriterionType, Decimal] = field(default_factory=dict)
    weights: dict[CriterionType, Decimal] = field(default_factory=dict)

    @property
    def criteria_checked(self) -> dict:
        """JSON-ready breakdown keyed by criterion name."""
        checked = {}
        for criterion, result in self.criteria.items():
            entry = result.to_dict()
            if criterion in self.points:
                entry["points"] = float(self.points[criterion])
                entry["weight"] = float(self.weights.get(criterion, Decimal("0")))
            checked[criterion.value] = entry
        return checked


class EvaluationPolicy(ABC):
    """
    Abstract aggregation strategy.

    Each concrete policy combines checker outputs into a Verdict. Policies
    must be pure: the same context always yields the same verdict.
    """

    policy_type: EvaluationPolicyType

    @abstractmethod
    def evaluate(self, context: EvaluationContext) -> Verdict:
        """
        Produce a verdict for the given evaluation context.

        Args:
            context: Snapshot, requirements, approved document types and config

        Returns:
            Verdict with status, reasons and criteria breakdown
        """


@dataclass(frozen=True)
class AutoDecision:
    """The evaluation sets the application status directly."""

    new_status: ApplicationStatus


@dataclass(frozen=True)
class Recommendation:
    """The evaluation only suggests a status for a human decision-maker."""

    suggested_status: ApplicationStatus


EvaluationOutcome = Union[AutoDecision, Recommendation]


def join_names(values: Sequence[Any]) -> str:
    """Join enum members or strings for reason messages."""
    return ", ".join(v.value if hasattr(v, "value") else str(v) for v in values)
