"""Outcome questionnaire service

Looks up questionnaires, scores submissions, stores them in the result
sink and summarizes history per condition.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Mapping, Optional, Sequence, Tuple

from shared.catalog import QuestionnaireReader
from shared.models import Questionnaire, QuestionnaireItem
from shared.storage import ResultSink
from outcomes.config import settings
from outcomes.models import ContextType, OutcomeAssessment, OutcomeSummary
from outcomes.services.conditions import (
    CHANGE_QUESTIONNAIRE,
    PAIN_QUESTIONNAIRE,
    questionnaire_key_for_condition,
)
from outcomes.services.scoring import calculate_score
from outcomes.services.summary import OutcomeSummaryCalculator

logger = logging.getLogger(__name__)


class QuestionnaireNotFoundError(LookupError):
    """Questionnaire key is not in the catalog"""


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def needs_follow_up(
    history: Sequence[OutcomeAssessment],
    now: Optional[datetime] = None,
    interval_days: Optional[int] = None,
) -> bool:
    """
    True when there is no outcome assessment yet or the latest one is
    older than the follow-up interval

    Args:
        history: outcome assessments for one condition
        now: reference time (default: current UTC time; naive values are UTC)
        interval_days: follow-up interval (default: settings)
    """
    if not history:
        return True

    interval = interval_days if interval_days is not None else settings.follow_up_interval_days
    now = _as_utc(now) if now else datetime.now(timezone.utc)
    last = max(_as_utc(a.created_at) for a in history)
    return now - last > timedelta(days=interval)


def order_responses(
    items: Sequence[QuestionnaireItem],
    responses: Mapping[str, Optional[float]],
) -> List[Optional[float]]:
    """
    Responses in item display order

    Responses may be keyed by item id or item_key. Without items the
    mapping order is kept.
    """
    if not items:
        return list(responses.values())

    ordered = []
    known = set()
    for item in items:
        known.update((item.id, item.item_key))
        if item.id in responses:
            ordered.append(responses[item.id])
        elif item.item_key in responses:
            ordered.append(responses[item.item_key])

    unknown = [key for key in responses if key not in known]
    if unknown:
        logger.debug(f"Ignoring {len(unknown)} responses for unknown items")
    return ordered


class OutcomeService:
    """Outcome scoring and history

    Usage:
        service = OutcomeService(catalog, sink)
        assessment = service.score_submission("odi", {"ODI_Q1": 2, ...}, "baseline", "back")
        summary = service.summary("back")
    """

    def __init__(
        self,
        questionnaires: QuestionnaireReader,
        sink: ResultSink,
        calculator: Optional[OutcomeSummaryCalculator] = None,
    ):
        self.questionnaires = questionnaires
        self.sink = sink
        self.calculator = calculator or OutcomeSummaryCalculator()

    def get_questionnaire(
        self, key: str
    ) -> Tuple[Questionnaire, List[QuestionnaireItem]]:
        """
        Questionnaire and its items in display order

        Raises:
            QuestionnaireNotFoundError: unknown key
        """
        questionnaire = self.questionnaires.get_questionnaire_by_key(key.lower())
        if questionnaire is None:
            raise QuestionnaireNotFoundError(f"Questionnaire not found: {key}")
        items = self.questionnaires.get_items_for_questionnaire(questionnaire.id)
        return questionnaire, items

    def score_submission(
        self,
        questionnaire_key: str,
        responses: Mapping[str, Optional[float]],
        context_type: ContextType,
        condition_tag: str,
        related_assessment_id: Optional[str] = None,
    ) -> OutcomeAssessment:
        """
        Score and store one questionnaire submission

        Args:
            questionnaire_key: odi, koos, quickdash, nprs, groc
            responses: item id (or item_key) -> raw response
            context_type: baseline, followup, final
            condition_tag: condition the submission tracks
            related_assessment_id: triage assessment it follows

        Returns:
            Stored OutcomeAssessment
        """
        questionnaire, items = self.get_questionnaire(questionnaire_key)
        values = order_responses(items, responses)
        result = calculate_score(questionnaire.scoring_type, values)

        assessment = OutcomeAssessment(
            questionnaire_id=questionnaire.id,
            questionnaire_key=questionnaire.key,
            scoring_type=questionnaire.scoring_type,
            context_type=context_type,
            condition_tag=condition_tag,
            related_assessment_id=related_assessment_id,
            responses={
                key: float(value)
                for key, value in responses.items()
                if value is not None
            },
            total_score=result.total_score,
            normalized_score=result.normalized_score,
            interpretation=result.interpretation,
        )
        self.sink.save_outcome(assessment)

        logger.info(
            f"Outcome scored: {questionnaire.key} {context_type} for '{condition_tag}' "
            f"-> {result.normalized_score} ({result.interpretation})"
        )
        return assessment

    def summary(self, condition_tag: str) -> OutcomeSummary:
        history = self.sink.outcome_history(condition_tag)

        questionnaires = {}
        for key in (
            questionnaire_key_for_condition(condition_tag),
            PAIN_QUESTIONNAIRE,
            CHANGE_QUESTIONNAIRE,
        ):
            questionnaire = self.questionnaires.get_questionnaire_by_key(key)
            if questionnaire is not None:
                questionnaires[key] = questionnaire

        return self.calculator.summarize(condition_tag, history, questionnaires)

    def needs_follow_up(self, condition_tag: str, now: Optional[datetime] = None) -> bool:
        return needs_follow_up(self.sink.outcome_history(condition_tag), now)
