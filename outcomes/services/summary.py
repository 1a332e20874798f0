"""Baseline vs latest outcome comparison"""

import logging
from datetime import datetime
from typing import Mapping, Optional, Sequence, Tuple

from langsmith import traceable

from shared.models import Questionnaire, ScoringFormula
from outcomes.config import settings
from outcomes.models import OutcomeAssessment, OutcomeSummary
from outcomes.services.conditions import (
    CHANGE_QUESTIONNAIRE,
    PAIN_QUESTIONNAIRE,
    questionnaire_key_for_condition,
)
from outcomes.services.scoring import round_score

logger = logging.getLogger(__name__)

FOLLOW_UP_CONTEXTS = ("followup", "final")


def _earliest(entries: Sequence[OutcomeAssessment]) -> Optional[OutcomeAssessment]:
    return min(entries, key=lambda a: a.created_at) if entries else None


def _latest(entries: Sequence[OutcomeAssessment]) -> Optional[OutcomeAssessment]:
    return max(entries, key=lambda a: a.created_at) if entries else None


def _first_date(*entries: Optional[OutcomeAssessment]) -> Optional[datetime]:
    return next((a.created_at for a in entries if a is not None), None)


def _change(
    baseline: Optional[OutcomeAssessment],
    latest: Optional[OutcomeAssessment],
) -> Optional[float]:
    if baseline is None or latest is None:
        return None
    if baseline.normalized_score is None or latest.normalized_score is None:
        return None
    return round_score(latest.normalized_score - baseline.normalized_score)


class OutcomeSummaryCalculator:
    """Computes change and clinical meaningfulness per condition"""

    def __init__(
        self,
        default_mcid: Optional[float] = None,
        nprs_mcid: Optional[float] = None,
    ):
        self.default_mcid = default_mcid if default_mcid is not None else settings.default_mcid
        self.nprs_mcid = nprs_mcid if nprs_mcid is not None else settings.nprs_mcid

    def compare(
        self,
        baseline_function: Optional[OutcomeAssessment],
        latest_function: Optional[OutcomeAssessment],
        baseline_pain: Optional[OutcomeAssessment],
        latest_pain: Optional[OutcomeAssessment],
        mcid: Optional[float] = None,
    ) -> Tuple[Optional[float], Optional[float], bool]:
        """
        Function and pain change

        Meaningful when |function change| >= mcid (default when unset or 0)
        or |pain change| >= the NPRS MCID.

        Returns:
            (function_change, pain_change, is_meaningful)
        """
        threshold = mcid or self.default_mcid

        function_change = _change(baseline_function, latest_function)
        pain_change = _change(baseline_pain, latest_pain)

        is_meaningful = (
            function_change is not None and abs(function_change) >= threshold
        ) or (pain_change is not None and abs(pain_change) >= self.nprs_mcid)

        return function_change, pain_change, is_meaningful

    @traceable(name="outcome_summary")
    def summarize(
        self,
        condition_tag: str,
        history: Sequence[OutcomeAssessment],
        questionnaires: Optional[Mapping[str, Questionnaire]] = None,
    ) -> OutcomeSummary:
        """
        Summarize outcome history for one condition

        Args:
            condition_tag: e.g. back, knee, shoulder
            history: outcome assessments (any order, other conditions ignored)
            questionnaires: questionnaires by key, for MCID lookup

        Returns:
            OutcomeSummary
        """
        function_key = questionnaire_key_for_condition(condition_tag)
        entries = [a for a in history if a.condition_tag == condition_tag]

        def select(key, contexts):
            return [
                a for a in entries
                if a.questionnaire_key == key and a.context_type in contexts
            ]

        baseline_function = _earliest(select(function_key, ("baseline",)))
        baseline_pain = _earliest(select(PAIN_QUESTIONNAIRE, ("baseline",)))
        followup_function = _latest(select(function_key, FOLLOW_UP_CONTEXTS))
        followup_pain = _latest(select(PAIN_QUESTIONNAIRE, FOLLOW_UP_CONTEXTS))
        final_groc = _latest(select(CHANGE_QUESTIONNAIRE, ("final",)))

        questionnaire = (questionnaires or {}).get(function_key)
        function_change, pain_change, is_meaningful = self.compare(
            baseline_function,
            followup_function,
            baseline_pain,
            followup_pain,
            mcid=questionnaire.mcid if questionnaire else None,
        )

        function_improved = None
        if function_change is not None:
            if ScoringFormula(function_key).lower_is_better:
                function_improved = function_change < 0
            else:
                function_improved = function_change > 0

        summary = OutcomeSummary(
            condition_tag=condition_tag,
            function_questionnaire_key=function_key,
            baseline_function=baseline_function,
            baseline_pain=baseline_pain,
            baseline_date=_first_date(baseline_function, baseline_pain),
            latest_function=followup_function or baseline_function,
            latest_pain=followup_pain or baseline_pain,
            latest_date=_first_date(followup_function, followup_pain),
            final_groc=final_groc,
            final_date=_first_date(final_groc),
            function_change=function_change,
            pain_change=pain_change,
            is_meaningful=is_meaningful,
            function_improved=function_improved,
        )

        logger.info(
            f"Outcome summary for '{condition_tag}': function_change={function_change}, "
            f"pain_change={pain_change}, meaningful={is_meaningful}"
        )
        return summary
