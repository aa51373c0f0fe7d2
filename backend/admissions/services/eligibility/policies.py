"""Aggregation policies combining checker outputs into a verdict."""

from collections import OrderedDict
from typing import Optional

from admissions.core.enums import CriterionType, EligibilityStatus, EvaluationPolicyType
from admissions.services.eligibility.base import (
    SUCCESS_REASON,
    CriterionResult,
    EvaluationContext,
    EvaluationPolicy,
    Verdict,
)
from admissions.services.eligibility.checkers import (
    check_completeness,
    check_courses,
    check_documents,
    check_gpa,
)
from admissions.services.eligibility.scoring import ScoringEngine


def run_checkers(context: EvaluationContext) -> "OrderedDict[CriterionType, CriterionResult]":
    """
    Run every criteria checker against the context.

    Results are ordered GPA, courses, documents, completeness; reasons are
    reported in this order.
    """
    snapshot = context.snapshot
    requirements = context.requirements
    config = context.config

    results: "OrderedDict[CriterionType, CriterionResult]" = OrderedDict()
    results[CriterionType.GPA] = check_gpa(snapshot.gpa, requirements.min_gpa)
    results[CriterionType.COURSES] = check_courses(
        snapshot.courses,
        requirements.mandatory_courses,
        config.required_total_courses,
        mode=config.course_matching,
        full_credit_count=config.full_credit_course_count,
    )
    results[CriterionType.DOCUMENTS] = check_documents(
        context.approved_document_types,
        requirements.required_documents,
    )
    results[CriterionType.COMPLETENESS] = check_completeness(snapshot.profile)
    return results


class WeightedScorePolicy(EvaluationPolicy):
    """
    Weighted-score policy (default).

    GPA, courses and completeness earn up to their configured weights
    (40/40/20 by default); the documents check joins the score when its
    weight is positive. The 0-100 score maps onto eligible / pending_review /
    not_eligible through configured thresholds.
    """

    policy_type = EvaluationPolicyType.WEIGHTED

    def __init__(self, scoring_engine: Optional[ScoringEngine] = None):
        self.scoring_engine = scoring_engine or ScoringEngine()

    def evaluate(self, context: EvaluationContext) -> Verdict:
        config = context.config
        criteria = run_checkers(context)

        weights = {
            criterion: config.weight_for(criterion)
            for criterion in criteria
            if config.weight_for(criterion) > 0
        }
        scored = {c: r for c, r in criteria.items() if c in weights}

        points = self.scoring_engine.calculate_points(scored, config)
        score = self.scoring_engine.calculate_score(points, weights)
        status = self.scoring_engine.classify_score(score, config)

        reasons = [
            reason
            for result in scored.values()
            if not result.passed
            for reason in result.reasons
        ]
        if not reasons and status == EligibilityStatus.ELIGIBLE:
            reasons = [SUCCESS_REASON]
        else:
            reasons.append(self.scoring_engine.summarize_score(score, status, config))

        return Verdict(
            status=status,
            reasons=reasons,
            criteria=dict(criteria),
            policy=self.policy_type,
            score=score,
            points=points,
            weights=weights,
        )


class BooleanPolicy(EvaluationPolicy):
    """
    Pass/fail policy.

    Eligible only if the GPA, courses and documents checks all pass; one
    reason per failing check, or a single success message.
    """

    policy_type = EvaluationPolicyType.BOOLEAN

    gated_criteria = (
        CriterionType.GPA,
        CriterionType.COURSES,
        CriterionType.DOCUMENTS,
    )

    def evaluate(self, context: EvaluationContext) -> Verdict:
        criteria = run_checkers(context)
        gated = [criteria[c] for c in self.gated_criteria]

        all_passed = all(result.passed for result in gated)
        if all_passed:
            reasons = [SUCCESS_REASON]
            status = EligibilityStatus.ELIGIBLE
        else:
            reasons = [reason for result in gated for reason in result.reasons]
            status = EligibilityStatus.NOT_ELIGIBLE

        return Verdict(
            status=status,
            reasons=reasons,
            criteria={c: criteria[c] for c in self.gated_criteria},
            policy=self.policy_type,
            score=None,
        )

