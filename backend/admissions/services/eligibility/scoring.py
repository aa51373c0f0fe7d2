"""Weighted scoring and score-to-verdict classification."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Mapping

from admissions.core.enums import CriterionType, EligibilityStatus
from admissions.services.eligibility.base import CriterionResult, EvaluationConfig

SCORE_QUANTUM = Decimal("0.01")


class ScoringEngine:
    """
    Scoring helpers for the weighted policy.

    Converts checker partial credit into weighted points, normalises the
    total to a 0-100 score and maps the score onto a verdict using the
    configured thresholds.
    """

    @staticmethod
    def calculate_points(
        criteria: Mapping[CriterionType, CriterionResult],
        config: EvaluationConfig,
    ) -> Dict[CriterionType, Decimal]:
        """
        Calculate the points each criterion earns.

        Args:
            criteria: Checker results keyed by criterion
            config: Engine configuration holding the weights

        Returns:
            Points per criterion (fraction x weight)
        """
        return {
            criterion: (result.fraction * config.weight_for(criterion)).quantize(
                SCORE_QUANTUM, rounding=ROUND_HALF_UP
            )
            for criterion, result in criteria.items()
        }

    @staticmethod
    def calculate_score(
        points: Mapping[CriterionType, Decimal],
        weights: Mapping[CriterionType, Decimal],
    ) -> Decimal:
        """
        Normalise earned points to a 0-100 score.

        Args:
            points: Points earned per criterion
            weights: Maximum points per criterion

        Returns:
            Score between 0 and 100, two decimal places
        """
        total_weight = sum(weights.values(), Decimal("0"))
        if total_weight <= 0:
            return Decimal("0.00")

        earned = sum(points.values(), Decimal("0"))
        score = earned / total_weight * Decimal("100")
        score = min(max(score, Decimal("0")), Decimal("100"))
        return score.quantize(SCORE_QUANTUM, rounding=ROUND_HALF_UP)

    @staticmethod
    def classify_score(score: Decimal, config: EvaluationConfig) -> EligibilityStatus:
        """
        Map a score onto a verdict.

        score >= eligible_threshold -> ELIGIBLE
        score >= review_threshold   -> PENDING_REVIEW
        otherwise                   -> NOT_ELIGIBLE
        """
        if score >= config.eligible_threshold:
            return EligibilityStatus.ELIGIBLE
        if score >= config.review_threshold:
            return EligibilityStatus.PENDING_REVIEW
        return EligibilityStatus.NOT_ELIGIBLE

    @staticmethod
    def summarize_score(
        score: Decimal,
        status: EligibilityStatus,
        config: EvaluationConfig,
    ) -> str:
        """Human-readable explanation of where a score landed."""
        if status == EligibilityStatus.ELIGIBLE:
            return (
                f"Eligibility score {score} meets the eligibility threshold "
                f"of {config.eligible_threshold}"
            )
        if status == EligibilityStatus.PENDING_REVIEW:
            return (
                f"Eligibility score {score} requires manual review "
                f"(eligible from {config.eligible_threshold}, review from {config.review_threshold})"
            )
        return (
            f"Eligibility score {score} is below the review threshold "
            f"of {config.review_threshold}"
        )
