"""Outcome Models"""

from .outcome import ContextType, OutcomeAssessment, OutcomeSummary, ScoreResult

__all__ = [
    "ContextType",
    "OutcomeAssessment",
    "OutcomeSummary",
    "ScoreResult",
]
