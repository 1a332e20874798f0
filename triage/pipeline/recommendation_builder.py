"""Recommendation pipeline

Flow:
1. Risk classification (critical short-circuits)
2. Post-op: protocol phase resolution and protocol exercise lookup
3. Otherwise, or when no protocol exercises exist: routine matching,
   then individual exercise scoring
4. Next steps (and optional LLM advisory notes)
"""

import logging
from typing import List, Optional, Tuple

from langsmith import traceable

from shared.catalog import CatalogReader
from shared.models import AssessmentRecord, Dosage, RiskLevel
from triage.models import (
    AssessmentResult,
    PhaseResolution,
    Recommendation,
    RecommendationSource,
    ScoredExercise,
)
from triage.services import (
    ExerciseScorer,
    NextStepPlanner,
    ProtocolPhaseResolver,
    RiskClassifier,
    RoutineMatcher,
    SafetyNoteAssistant,
    SafetyNoteComposer,
)

logger = logging.getLogger(__name__)


class RecommendationBuilder:
    """Assessment -> risk tier, recommendations and next steps

    Usage:
        builder = RecommendationBuilder(catalog)
        result = builder.build(assessment)

    Catalog read failures (CatalogUnavailableError) propagate to the caller.
    """

    def __init__(
        self,
        catalog: CatalogReader,
        risk_classifier: Optional[RiskClassifier] = None,
        routine_matcher: Optional[RoutineMatcher] = None,
        exercise_scorer: Optional[ExerciseScorer] = None,
        phase_resolver: Optional[ProtocolPhaseResolver] = None,
        safety_notes: Optional[SafetyNoteComposer] = None,
        next_steps: Optional[NextStepPlanner] = None,
        safety_assistant: Optional[SafetyNoteAssistant] = None,
    ):
        self.catalog = catalog
        self.safety_notes = safety_notes or SafetyNoteComposer()
        self.risk_classifier = risk_classifier or RiskClassifier()
        self.routine_matcher = routine_matcher or RoutineMatcher(self.safety_notes)
        self.exercise_scorer = exercise_scorer or ExerciseScorer()
        self.phase_resolver = phase_resolver or ProtocolPhaseResolver()
        self.next_steps = next_steps or NextStepPlanner()
        self.safety_assistant = safety_assistant

    @traceable(name="recommendation_builder")
    def build(self, assessment: AssessmentRecord) -> AssessmentResult:
        """
        Run the full pipeline for one assessment

        Args:
            assessment: patient assessment

        Returns:
            AssessmentResult (recommendations may be empty)
        """
        risk = self.risk_classifier.classify(assessment)

        if risk == RiskLevel.CRITICAL:
            logger.info("Critical risk: exercise recommendations withheld")
            return AssessmentResult(
                assessment=assessment,
                risk_level=risk,
                next_steps=self.next_steps.plan(assessment, risk),
            )

        recommendations: List[Recommendation] = []
        source: RecommendationSource = "none"
        routine_name: Optional[str] = None
        phase: Optional[PhaseResolution] = None
        phase_name: Optional[str] = None

        if assessment.is_post_op:
            phase = self.phase_resolver.resolve(assessment)
            recommendations, phase_name = self._protocol_recommendations(assessment, phase)
            if recommendations:
                source = "protocol"

        if not recommendations:
            recommendations, source, routine_name = self._standard_recommendations(
                assessment
            )

        advisory_notes: List[str] = []
        if self.safety_assistant is not None and recommendations:
            advisory_notes = self.safety_assistant.suggest(assessment, risk, recommendations)

        logger.info(
            f"Assessment processed: {risk.value} risk, "
            f"{len(recommendations)} recommendations via {source}"
        )

        return AssessmentResult(
            assessment=assessment,
            risk_level=risk,
            recommendations=recommendations,
            next_steps=self.next_steps.plan(assessment, risk, phase),
            source=source,
            routine_name=routine_name,
            phase=phase,
            phase_name=phase_name,
            advisory_notes=advisory_notes,
        )

    def _protocol_recommendations(
        self,
        assessment: AssessmentRecord,
        phase: PhaseResolution,
    ) -> Tuple[List[Recommendation], Optional[str]]:
        """Protocol exercises for the resolved phase ([] means fall back)"""
        if phase.protocol_key is None:
            logger.info("Post-op assessment without region or surgery type; using standard path")
            return [], None

        protocol = self.catalog.find_protocol(phase.protocol_key)
        if protocol is None:
            logger.info(f"No protocol registered for '{phase.protocol_key}'; using standard path")
            return [], None

        entries = self.catalog.get_phase_exercises(protocol.id, phase.phase_number)
        if not entries:
            logger.info(
                f"Protocol '{phase.protocol_key}' has no exercises for phase "
                f"{phase.phase_number}; using standard path"
            )
            return [], None

        phase_name = protocol.phase_name(phase.phase_number)
        recommendations = []
        for entry in entries:
            exercise = entry.exercise
            recommendations.append(
                Recommendation(
                    exercise=exercise,
                    dosage=Dosage.resolve(entry.dosage_override, exercise.dosage),
                    relevance_score=100 - entry.display_order,
                    reasoning=(
                        f"{protocol.surgery_name} protocol, "
                        f"Phase {phase.phase_number}: {phase_name}"
                    ),
                    safety_notes=self.safety_notes.compose(
                        assessment, exercise, [entry.phase_notes]
                    ),
                    red_flag_warnings=list(exercise.red_flag_warnings),
                    progression_tips=list(exercise.progression_tips),
                )
            )
        return recommendations, phase_name

    def _standard_recommendations(
        self,
        assessment: AssessmentRecord,
    ) -> Tuple[List[Recommendation], RecommendationSource, Optional[str]]:
        """Routine match, else individually scored exercises"""
        match = self.routine_matcher.find_best(
            assessment, self.catalog.list_active_routines()
        )
        if match is not None:
            items = self.catalog.get_routine_items(match.routine.id)
            if items:
                return (
                    self.routine_matcher.expand(match, items, assessment),
                    "routine",
                    match.routine.name,
                )
            logger.info(f"Routine '{match.routine.name}' has no items; scoring exercises")

        scored = self.exercise_scorer.rank(
            assessment, self.catalog.list_active_exercises()
        )
        recommendations = [self._from_scored(assessment, s) for s in scored]
        return recommendations, ("scored" if recommendations else "none"), None

    def _from_scored(
        self,
        assessment: AssessmentRecord,
        scored: ScoredExercise,
    ) -> Recommendation:
        exercise = scored.exercise
        return Recommendation(
            exercise=exercise,
            dosage=Dosage.resolve(exercise.dosage),
            relevance_score=scored.score,
            reasoning=". ".join(scored.match_reasons),
            safety_notes=self.safety_notes.compose(assessment, exercise),
            red_flag_warnings=list(exercise.red_flag_warnings),
            progression_tips=list(exercise.progression_tips),
        )
