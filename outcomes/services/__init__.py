"""Outcome Services"""

from .scoring import (
    UnknownScoringFormulaError,
    calculate_groc,
    calculate_koos,
    calculate_nprs,
    calculate_odi,
    calculate_quickdash,
    calculate_score,
    round_score,
)
from .conditions import map_pain_location_to_condition, questionnaire_key_for_condition
from .summary import OutcomeSummaryCalculator
from .outcome_service import (
    OutcomeService,
    QuestionnaireNotFoundError,
    needs_follow_up,
    order_responses,
)

__all__ = [
    "UnknownScoringFormulaError",
    "calculate_groc",
    "calculate_koos",
    "calculate_nprs",
    "calculate_odi",
    "calculate_quickdash",
    "calculate_score",
    "round_score",
    "map_pain_location_to_condition",
    "questionnaire_key_for_condition",
    "OutcomeSummaryCalculator",
    "OutcomeService",
    "QuestionnaireNotFoundError",
    "needs_follow_up",
    "order_responses",
]
