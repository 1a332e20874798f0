"""Triage Models"""

from .output import (
    AssessmentResult,
    PhaseResolution,
    Recommendation,
    RecommendationSource,
    RoutineMatch,
    ScoredExercise,
)

__all__ = [
    "AssessmentResult",
    "PhaseResolution",
    "Recommendation",
    "RecommendationSource",
    "RoutineMatch",
    "ScoredExercise",
]
