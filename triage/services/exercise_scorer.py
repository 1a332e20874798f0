"""Fallback exercise scoring

Used when no curated routine fits. Scores each catalog exercise against
the assessment's search terms, filters by difficulty against pain level,
and returns a fully deterministic ranking.
"""

import logging
from typing import List, Optional, Sequence

from langsmith import traceable

from shared.models import AssessmentRecord, ExerciseRecord
from triage.config import settings
from triage.models import ScoredExercise
from triage.vocabulary import build_search_terms, region_aliases

logger = logging.getLogger(__name__)

BODY_PART_POINTS = 40
CONDITION_POINTS = 15
KEYWORD_POINTS = 5
KEYWORD_CAP = 20
BEGINNER_POINTS = 10
FEATURED_POINTS = 5
DISPLAY_ORDER_CEILING = 10

# difficulty gates
NO_ADVANCED_PAIN = 7
GUARDED_ADVANCED_PAIN = 5
GUARDED_ADVANCED_SCORE = 70


def _overlaps(a: str, b: str) -> bool:
    a, b = a.lower(), b.lower()
    return bool(a) and bool(b) and (a in b or b in a)


class ExerciseScorer:
    """Scores individual exercises"""

    def __init__(
        self,
        min_score: Optional[int] = None,
        max_exercises: Optional[int] = None,
        min_exercises: Optional[int] = None,
        fallback_count: Optional[int] = None,
    ):
        self.min_score = min_score if min_score is not None else settings.exercise_min_score
        self.max_exercises = (
            max_exercises if max_exercises is not None else settings.max_exercises
        )
        self.min_exercises = (
            min_exercises if min_exercises is not None else settings.min_exercises
        )
        self.fallback_count = (
            fallback_count if fallback_count is not None else settings.fallback_exercise_count
        )

    def score(
        self,
        exercise: ExerciseRecord,
        assessment: AssessmentRecord,
        search_terms: Sequence[str],
    ) -> ScoredExercise:
        score = 0
        reasons: List[str] = []

        location = assessment.pain_location.strip().lower()
        locations = [location] + region_aliases(location) if location else []
        if any(_overlaps(part, loc) for part in exercise.body_parts for loc in locations):
            score += BODY_PART_POINTS
            reasons.append(f"Targets {assessment.pain_location}")

        matched_conditions = [
            c for c in exercise.conditions
            if any(_overlaps(c, term) for term in search_terms)
        ]
        if matched_conditions:
            score += CONDITION_POINTS
            reasons.append(f"Addresses: {', '.join(matched_conditions)}")

        keyword_terms = [
            term for term in search_terms
            if any(_overlaps(keyword, term) for keyword in exercise.keywords)
        ]
        score += min(len(keyword_terms) * KEYWORD_POINTS, KEYWORD_CAP)

        if assessment.pain_level >= 6 and exercise.difficulty == "Beginner":
            score += BEGINNER_POINTS
            reasons.append("Gentle enough for your current pain level")

        if exercise.is_featured:
            score += FEATURED_POINTS

        score += max(0, DISPLAY_ORDER_CEILING - exercise.display_order)

        return ScoredExercise(exercise=exercise, score=score, match_reasons=reasons)

    def passes_difficulty(self, scored: ScoredExercise, pain_level: int) -> bool:
        if scored.exercise.difficulty != "Advanced":
            return True
        if pain_level >= NO_ADVANCED_PAIN:
            return False
        if pain_level >= GUARDED_ADVANCED_PAIN:
            return scored.score > GUARDED_ADVANCED_SCORE
        return True

    @traceable(name="exercise_scoring")
    def rank(
        self,
        assessment: AssessmentRecord,
        exercises: Sequence[ExerciseRecord],
    ) -> List[ScoredExercise]:
        """
        Rank exercises for an assessment

        Sorted by score desc, display_order asc, id asc. Keeps entries at or
        above min_score (at most max_exercises); when fewer than
        min_exercises qualify, returns the top fallback_count instead.

        Args:
            assessment: patient assessment
            exercises: active catalog exercises

        Returns:
            Ranked exercises (empty for an empty catalog)
        """
        if not exercises:
            return []

        search_terms = build_search_terms(assessment)
        scored = [self.score(ex, assessment, search_terms) for ex in exercises]
        eligible = [
            s for s in scored if self.passes_difficulty(s, assessment.pain_level)
        ]
        eligible.sort(key=lambda s: (-s.score, s.exercise.display_order, s.exercise.id))

        qualified = [s for s in eligible if s.score >= self.min_score][: self.max_exercises]
        if len(qualified) < self.min_exercises:
            logger.info(
                f"Only {len(qualified)} exercises scored >= {self.min_score}; "
                f"widening to top {self.fallback_count}"
            )
            return eligible[: self.fallback_count]

        return qualified
