"""Triage output models"""

import uuid
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from shared.models import (
    AssessmentRecord,
    Dosage,
    ExerciseRecord,
    RiskLevel,
    RoutineRecord,
)


RecommendationSource = Literal["protocol", "routine", "scored", "none"]


class Recommendation(BaseModel):
    """Recommended exercise with resolved dosage and safety notes"""

    exercise: ExerciseRecord = Field(..., description="Catalog exercise")
    dosage: Dosage = Field(..., description="Resolved dosage")
    relevance_score: int = Field(..., description="Relevance score")
    reasoning: str = Field(default="", description="Why it was recommended")
    safety_notes: List[str] = Field(
        default_factory=list, description="Ordered, most situational first"
    )
    red_flag_warnings: List[str] = Field(default_factory=list)
    progression_tips: List[str] = Field(default_factory=list)


class ScoredExercise(BaseModel):
    """Exercise with its fallback score"""

    exercise: ExerciseRecord
    score: int = Field(..., description="Accumulated points")
    match_reasons: List[str] = Field(default_factory=list)


class RoutineMatch(BaseModel):
    """Best routine and its score"""

    routine: RoutineRecord
    score: int = Field(..., description="Match score")
    matched_phrases: List[str] = Field(
        default_factory=list, description="Target phrases that matched"
    )


class PhaseResolution(BaseModel):
    """Post-operative protocol phase after safety gates"""

    protocol_key: Optional[str] = Field(
        default=None, description="None when region or surgery type is missing"
    )
    nominal_phase: int = Field(..., ge=1, le=4, description="Phase from weeks since surgery")
    phase_number: int = Field(..., ge=1, le=4, description="Phase after safety gates")
    applied_gates: List[str] = Field(
        default_factory=list, description="Gates that lowered the phase"
    )

    @property
    def was_clamped(self) -> bool:
        return self.phase_number < self.nominal_phase


class AssessmentResult(BaseModel):
    """
    Result of one assessment submission

    Produced fresh per request. Critical risk carries no recommendations.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    assessment: AssessmentRecord
    risk_level: RiskLevel
    recommendations: List[Recommendation] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)
    source: RecommendationSource = Field(default="none", description="Path that produced recommendations")
    routine_name: Optional[str] = Field(default=None)
    phase: Optional[PhaseResolution] = Field(default=None)
    phase_name: Optional[str] = Field(default=None)
    advisory_notes: List[str] = Field(
        default_factory=list, description="LLM-phrased advice (optional)"
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation time"
    )

    @property
    def has_recommendations(self) -> bool:
        return len(self.recommendations) > 0
