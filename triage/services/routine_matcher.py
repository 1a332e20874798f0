"""Curated routine matching"""

import logging
import re
from typing import List, Optional, Sequence

from langsmith import traceable

from shared.models import AssessmentRecord, Dosage, RoutineItem, RoutineRecord
from triage.config import settings
from triage.models import Recommendation, RoutineMatch
from triage.services.safety_notes import SafetyNoteComposer
from triage.vocabulary import EXCLUSION_STOP_WORDS, build_search_terms, symptoms_match

logger = logging.getLogger(__name__)

TRAUMA_MARKERS = ("trauma", "traumatic")
TRAUMA_MENTIONS = re.compile(r"\b(falls?|fell|accidents?|injury|injuries|injured|hit)\b")

NEURO_MARKERS = ("neurolog", "nerve", "radicular", "numbness", "tingling", "sensory")
NEURO_MENTIONS = ("numbness", "tingling", "weakness")


class RoutineMatcher:
    """Scores curated routines against an assessment and expands the winner"""

    def __init__(
        self,
        safety_notes: Optional[SafetyNoteComposer] = None,
        threshold: Optional[int] = None,
        item_points: Optional[int] = None,
        location_bonus: Optional[int] = None,
        pain_type_bonus: Optional[int] = None,
    ):
        self.safety_notes = safety_notes or SafetyNoteComposer()
        self.threshold = threshold if threshold is not None else settings.routine_match_threshold
        self.item_points = item_points if item_points is not None else settings.routine_item_points
        self.location_bonus = (
            location_bonus if location_bonus is not None else settings.routine_location_bonus
        )
        self.pain_type_bonus = (
            pain_type_bonus if pain_type_bonus is not None else settings.routine_pain_type_bonus
        )

    def score_routine(
        self,
        routine: RoutineRecord,
        assessment: AssessmentRecord,
        search_terms: Sequence[str],
    ) -> RoutineMatch:
        """
        Score one routine

        +item_points per distinct target phrase matching any search term,
        +location_bonus if the pain location appears in name/description,
        +pain_type_bonus if a pain type tag appears in the routine text or
        any target phrase.
        """
        matched: List[str] = []
        seen = set()
        for phrase in routine.target_symptoms:
            key = phrase.strip().lower()
            if not key or key in seen:
                continue
            seen.add(key)
            if any(symptoms_match(phrase, term) for term in search_terms):
                matched.append(phrase)

        score = self.item_points * len(matched)

        location = assessment.pain_location.strip().lower()
        if location and location in routine.search_text:
            score += self.location_bonus

        texts = [routine.search_text] + [p.lower() for p in routine.target_symptoms]
        if any(tag in text for tag in assessment.pain_type_tags for text in texts):
            score += self.pain_type_bonus

        return RoutineMatch(routine=routine, score=score, matched_phrases=matched)

    def exclusion_reason(
        self,
        routine: RoutineRecord,
        assessment: AssessmentRecord,
    ) -> Optional[str]:
        """
        First exclusion phrase that applies to the assessment, if any

        A phrase applies when it names trauma and the assessment mentions a
        fall, accident, injury or hit; when it names neurological involvement
        and the assessment mentions numbness, tingling or weakness; or when
        its first word (leading filler words skipped) starts a word of the
        assessment text, so "Recent" also catches "recently".
        """
        text = assessment.combined_text()
        if not text:
            return None

        for phrase in routine.exclusion_criteria:
            lowered = phrase.lower()

            if any(m in lowered for m in TRAUMA_MARKERS) and TRAUMA_MENTIONS.search(text):
                return phrase

            if any(m in lowered for m in NEURO_MARKERS) and any(
                m in text for m in NEURO_MENTIONS
            ):
                return phrase

            words = [w for w in re.findall(r"[a-z]+", lowered) if w not in EXCLUSION_STOP_WORDS]
            if words and re.search(rf"\b{re.escape(words[0])}", text):
                return phrase

        return None

    @traceable(name="routine_matching")
    def find_best(
        self,
        assessment: AssessmentRecord,
        routines: Sequence[RoutineRecord],
    ) -> Optional[RoutineMatch]:
        """
        Best routine above threshold that is not excluded

        Ties keep catalog order. Only the top routine is considered; if it
        is below threshold or excluded, there is no match.

        Args:
            assessment: patient assessment
            routines: active routines

        Returns:
            RoutineMatch or None
        """
        if not routines:
            return None

        search_terms = build_search_terms(assessment)

        best: Optional[RoutineMatch] = None
        for routine in routines:
            match = self.score_routine(routine, assessment, search_terms)
            if best is None or match.score > best.score:
                best = match

        if best.score < self.threshold:
            logger.info(
                f"No routine above threshold (best '{best.routine.name}' "
                f"scored {best.score} < {self.threshold})"
            )
            return None

        reason = self.exclusion_reason(best.routine, assessment)
        if reason:
            logger.info(
                f"Routine '{best.routine.name}' excluded by criterion: {reason}"
            )
            return None

        logger.info(f"Routine matched: '{best.routine.name}' (score={best.score})")
        return best

    def expand(
        self,
        match: RoutineMatch,
        items: Sequence[RoutineItem],
        assessment: AssessmentRecord,
    ) -> List[Recommendation]:
        """
        Turn routine items into recommendations in sequence order

        relevance = 100 - sequence_order; the routine disclaimer leads the
        first item's safety notes.
        """
        routine = match.routine
        ordered = sorted(items, key=lambda item: item.sequence_order)
        total = len(ordered)

        recommendations = []
        for index, item in enumerate(ordered, start=1):
            phase = item.phase or "General"
            reasoning = (
                f"Part of the {routine.name} ({phase} phase), exercise {index} of {total}"
            )
            if item.is_optional:
                reasoning += " (optional)"

            leading = [item.phase_notes, item.transition_notes]
            if index == 1 and routine.disclaimer:
                leading.insert(0, routine.disclaimer)

            recommendations.append(
                Recommendation(
                    exercise=item.exercise,
                    dosage=Dosage.resolve(item.dosage_override, item.exercise.dosage),
                    relevance_score=100 - item.sequence_order,
                    reasoning=reasoning,
                    safety_notes=self.safety_notes.compose(
                        assessment, item.exercise, leading
                    ),
                    red_flag_warnings=list(item.exercise.red_flag_warnings),
                    progression_tips=list(item.exercise.progression_tips),
                )
            )

        return recommendations
