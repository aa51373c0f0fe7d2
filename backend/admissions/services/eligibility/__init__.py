"""Eligibility engine for evaluating admission applications against program requirements."""

from .base import (
    ApplicationSnapshot,
    AutoDecision,
    CourseRecord,
    CriterionResult,
    EvaluationConfig,
    EvaluationContext,
    EvaluationOutcome,
    EvaluationPolicy,
    ProgramRequirements,
    Recommendation,
    Verdict,
)
from .engine import RuleEngine
from .policies import BooleanPolicy, WeightedScorePolicy
from .scoring import ScoringEngine

__all__ = [
    "ApplicationSnapshot",
    "AutoDecision",
    "BooleanPolicy",
    "CourseRecord",
    "CriterionResult",
    "EvaluationConfig",
    "EvaluationContext",
    "EvaluationOutcome",
    "EvaluationPolicy",
    "ProgramRequirements",
    "Recommendation",
    "RuleEngine",
    "ScoringEngine",
    "Verdict",
    "WeightedScorePolicy",
]
