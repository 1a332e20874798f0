"""Standardized outcome measure scoring

Pure functions. Out-of-range item responses are dropped (ODI, KOOS,
QuickDASH) or clamped (NPRS, GROC); None responses are ignored. Scores are
rounded half-up to one decimal.
"""

import math
from typing import Iterable, List, Optional, Sequence, Union

from langsmith import traceable

from shared.models import ScoringFormula
from outcomes.models import ScoreResult

NO_RESPONSES = "No responses"


class UnknownScoringFormulaError(ValueError):
    """Scoring key is not one of odi, koos, quickdash, nprs, groc"""


def round_score(value: float) -> float:
    """Round half-up to one decimal (33.25 -> 33.3)"""
    return math.floor(value * 10 + 0.5) / 10


def _valid(responses: Iterable[Optional[float]], low: float, high: float) -> List[float]:
    return [r for r in responses if r is not None and low <= r <= high]


def calculate_odi(responses: Sequence[Optional[float]]) -> ScoreResult:
    """
    Oswestry Disability Index

    Items 0-5; normalized = sum / (5 * n) * 100, higher = more disability.
    """
    valid = _valid(responses, 0, 5)
    if not valid:
        return ScoreResult(total_score=0, normalized_score=0, interpretation=NO_RESPONSES)

    total = sum(valid)
    normalized = total / (5 * len(valid)) * 100

    if normalized <= 20:
        interpretation = "Minimal disability"
    elif normalized <= 40:
        interpretation = "Moderate disability"
    elif normalized <= 60:
        interpretation = "Severe disability"
    elif normalized <= 80:
        interpretation = "Crippled"
    else:
        interpretation = "Bed-bound or exaggerating"

    return ScoreResult(
        total_score=round_score(total),
        normalized_score=round_score(normalized),
        interpretation=interpretation,
    )


def calculate_koos(responses: Sequence[Optional[float]]) -> ScoreResult:
    """
    Knee injury and Osteoarthritis Outcome Score

    Items 0-4 with 0 = no problems; normalized = 100 - sum / (4 * n) * 100,
    so higher = better function.
    """
    valid = _valid(responses, 0, 4)
    if not valid:
        return ScoreResult(total_score=0, normalized_score=100, interpretation=NO_RESPONSES)

    total = sum(valid)
    normalized = 100 - total / (4 * len(valid)) * 100

    if normalized >= 90:
        interpretation = "Normal function"
    elif normalized >= 75:
        interpretation = "Near normal function"
    elif normalized >= 50:
        interpretation = "Moderate impairment"
    elif normalized >= 25:
        interpretation = "Severe impairment"
    else:
        interpretation = "Extreme impairment"

    return ScoreResult(
        total_score=round_score(total),
        normalized_score=round_score(normalized),
        interpretation=interpretation,
    )


def calculate_quickdash(responses: Sequence[Optional[float]]) -> ScoreResult:
    """QuickDASH: items 1-5; normalized = (mean - 1) * 25"""
    valid = _valid(responses, 1, 5)
    if not valid:
        return ScoreResult(total_score=0, normalized_score=0, interpretation=NO_RESPONSES)

    total = sum(valid)
    normalized = (total / len(valid) - 1) * 25

    if normalized <= 20:
        interpretation = "Minimal disability"
    elif normalized <= 40:
        interpretation = "Mild disability"
    elif normalized <= 60:
        interpretation = "Moderate disability"
    elif normalized <= 80:
        interpretation = "Severe disability"
    else:
        interpretation = "Extreme disability"

    return ScoreResult(
        total_score=round_score(total),
        normalized_score=round_score(normalized),
        interpretation=interpretation,
    )


def calculate_nprs(response: Optional[float]) -> ScoreResult:
    """Numeric pain rating, clamped to 0-10"""
    if response is None:
        return ScoreResult(total_score=0, normalized_score=0, interpretation=NO_RESPONSES)

    score = float(max(0, min(10, response)))

    if score == 0:
        interpretation = "No pain"
    elif score <= 3:
        interpretation = "Mild pain"
    elif score <= 6:
        interpretation = "Moderate pain"
    elif score <= 9:
        interpretation = "Severe pain"
    else:
        interpretation = "Worst possible pain"

    return ScoreResult(total_score=score, normalized_score=score, interpretation=interpretation)


def calculate_groc(response: Optional[float]) -> ScoreResult:
    """Global rating of change, clamped to -7..+7"""
    if response is None:
        return ScoreResult(total_score=0, normalized_score=0, interpretation=NO_RESPONSES)

    score = float(max(-7, min(7, response)))

    if score <= -5:
        interpretation = "Very much worse"
    elif score <= -3:
        interpretation = "Much worse"
    elif score <= -1:
        interpretation = "Somewhat worse"
    elif score == 0:
        interpretation = "No change"
    elif score <= 2:
        interpretation = "Somewhat better"
    elif score <= 4:
        interpretation = "Much better"
    else:
        interpretation = "Very much better"

    return ScoreResult(total_score=score, normalized_score=score, interpretation=interpretation)


def parse_formula(key: Union[str, ScoringFormula]) -> ScoringFormula:
    try:
        return ScoringFormula(key.lower() if isinstance(key, str) else key)
    except ValueError as e:
        raise UnknownScoringFormulaError(f"Unknown questionnaire type: {key}") from e


@traceable(name="outcome_scoring")
def calculate_score(
    key: Union[str, ScoringFormula],
    responses: Sequence[Optional[float]],
) -> ScoreResult:
    """
    Score responses with the named formula

    NPRS and GROC use the first non-empty response.

    Args:
        key: odi, koos, quickdash, nprs or groc
        responses: raw item responses in item display order

    Returns:
        ScoreResult

    Raises:
        UnknownScoringFormulaError: key is not a known formula
    """
    formula = parse_formula(key)

    if formula == ScoringFormula.ODI:
        return calculate_odi(responses)
    if formula == ScoringFormula.KOOS:
        return calculate_koos(responses)
    if formula == ScoringFormula.QUICKDASH:
        return calculate_quickdash(responses)

    first = next((r for r in responses if r is not None), None)
    if formula == ScoringFormula.NPRS:
        return calculate_nprs(first)
    return calculate_groc(first)
