"""Rule engine coordinating eligibility policies."""

import logging
from typing import Dict, Iterable, Optional

from admissions.core.enums import (
    ApplicationStatus,
    DocumentType,
    EvaluationPolicyType,
    StatusUpdateMode,
)
from admissions.core.workflow import VERDICT_TO_APPLICATION_STATUS
from admissions.services.eligibility.base import (
    ApplicationSnapshot,
    AutoDecision,
    EvaluationConfig,
    EvaluationContext,
    EvaluationOutcome,
    EvaluationPolicy,
    ProgramRequirements,
    Recommendation,
    Verdict,
)
from admissions.services.eligibility.policies import BooleanPolicy, WeightedScorePolicy

logger = logging.getLogger(__name__)


class RuleEngine:
    """
    Rule engine for eligibility evaluation.

    This class:
    - Holds the immutable EvaluationConfig it was constructed with
    - Maintains a registry of aggregation policies
    - Evaluates a snapshot with the configured (or an explicit) policy
    - Maps verdicts onto application-status outcomes
    """

    def __init__(self, config: Optional[EvaluationConfig] = None):
        """
        Initialize the rule engine with its policy registry.

        Args:
            config: Engine configuration; library defaults if omitted
        """
        self.config = config or EvaluationConfig()
        self._policies: Dict[EvaluationPolicyType, EvaluationPolicy] = {}
        self._register_default_policies()

    def _register_default_policies(self):
        """Register the built-in weighted and boolean policies."""
        self._policies[EvaluationPolicyType.WEIGHTED] = WeightedScorePolicy()
        self._policies[EvaluationPolicyType.BOOLEAN] = BooleanPolicy()

    def register_policy(
        self, policy_type: EvaluationPolicyType, policy: EvaluationPolicy
    ) -> None:
        """
        Register a custom policy for a policy type.

        Args:
            policy_type: The policy type to handle
            policy: The policy instance
        """
        self._policies[policy_type] = policy

    def resolve_requirements(self, program_id, requirement) -> ProgramRequirements:
        """Merge a program requirement row (or None) with the configured defaults."""
        return ProgramRequirements.resolve(program_id, requirement, self.config)

    def evaluate(
        self,
        snapshot: ApplicationSnapshot,
        requirements: ProgramRequirements,
        approved_document_types: Iterable[DocumentType],
        policy_type: Optional[EvaluationPolicyType] = None,
    ) -> Verdict:
        """
        Evaluate an application snapshot against program requirements.

        Args:
            snapshot: Application data at evaluation time
            requirements: Resolved program requirements
            approved_document_types: Types with at least one approved document
            policy_type: Override of the configured policy

        Returns:
            Verdict with status, optional score, reasons and criteria breakdown

        Raises:
            ValueError: If no policy is registered for the requested type
        """
        policy_type = policy_type or self.config.policy
        policy = self._policies.get(policy_type)
        if policy is None:
            raise ValueError(f"No policy registered for type: {policy_type.value}")

        context = EvaluationContext(
            snapshot=snapshot,
            requirements=requirements,
            approved_document_types=frozenset(approved_document_types),
            config=self.config,
        )
        verdict = policy.evaluate(context)

        logger.debug(
            f"Policy {policy_type.value} evaluated application {snapshot.application_id}: "
            f"{verdict.status.value} (score={verdict.score})"
        )
        return verdict

    def derive_outcome(self, verdict: Verdict) -> Optional[EvaluationOutcome]:
        """
        Translate a verdict into an application-status outcome.

        AUTO_DECIDE maps eligible/not_eligible straight onto accepted/rejected
        (pending_review onto under_review), bypassing the transition table.
        RECOMMEND produces the same target as a suggestion only. NONE yields
        no outcome.
        """
        target: ApplicationStatus = VERDICT_TO_APPLICATION_STATUS[verdict.status]

        if self.config.status_mode == StatusUpdateMode.AUTO_DECIDE:
            return AutoDecision(new_status=target)
        if self.config.status_mode == StatusUpdateMode.RECOMMEND:
            return Recommendation(suggested_status=target)
        return None

    def describe_requirements(self) -> dict:
        """
        Describe the configured rules for display.

        Evaluation always reads live program requirements; this description
        only reflects the defaults and thresholds.
        """
        config = self.config
        description = {
            "policy": config.policy.value,
            "course_matching": config.course_matching.value,
            "mandatory_courses": list(config.mandatory_courses),
            "total_courses_required": config.required_total_courses,
            "required_documents": [d.value for d in config.required_documents],
            "default_min_gpa": float(config.default_min_gpa),
            "gpa_scale": float(config.gpa_scale),
            "note": "Minimum GPA, mandatory courses and required documents may vary by program",
        }
        if config.policy == EvaluationPolicyType.WEIGHTED:
            description["weights"] = {
                "gpa": float(config.gpa_weight),
                "courses": float(config.courses_weight),
                "completeness": float(config.completeness_weight),
                "documents": float(config.documents_weight),
            }
            description["thresholds"] = {
                "eligible": float(config.eligible_threshold),
                "review": float(config.review_threshold),
            }
        return description
