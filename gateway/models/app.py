"""App-facing request/response models for Gateway endpoints."""

from datetime import datetime
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shared.models import AssessmentRecord, PostOpRecord, Questionnaire, QuestionnaireItem
from outcomes.models import OutcomeAssessment, OutcomeSummary
from triage.models import AssessmentResult, Recommendation


class AppPostOpBlock(BaseModel):
    """Post-operative intake block"""

    model_config = ConfigDict(populate_by_name=True)

    surgery_status: Literal["no_surgery", "post_op", "not_sure"] = Field(
        default="no_surgery", alias="surgeryStatus"
    )
    post_op_region: Optional[str] = Field(
        default=None, alias="postOpRegion", description="Shoulder, Knee, Hip, Elbow, Foot/Ankle"
    )
    surgery_type: Optional[str] = Field(
        default=None, alias="surgeryType", description="e.g. total_knee_arthroplasty"
    )
    procedure_modifier: Optional[str] = Field(
        default=None, alias="procedureModifier", description="e.g. Grade 2 (Medium Tear)"
    )
    weeks_since_surgery: Optional[str] = Field(
        default=None, alias="weeksSinceSurgery", description="0-2 weeks ... 12+ weeks"
    )
    weight_bearing_status: Optional[str] = Field(default=None, alias="weightBearingStatus")
    surgeon_precautions: Optional[Literal["yes", "no", "not_sure"]] = Field(
        default=None, alias="surgeonPrecautions"
    )

    def to_record(self) -> PostOpRecord:
        return PostOpRecord(**self.model_dump())


class AppAssessmentRequest(BaseModel):
    """App assessment submission"""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "painLevel": 4,
                "painLocation": "Lower Back",
                "painDuration": "1-4 weeks",
                "painType": "Dull/Aching",
                "mechanismOfInjury": "Started after a long drive",
                "medications": "",
                "additionalSymptoms": ["Stiffness in the morning"],
                "redFlags": [],
                "location": "Austin, Texas",
            }
        },
    )

    pain_level: int = Field(..., alias="painLevel", ge=0, le=10, description="Pain level (0-10)")
    pain_location: str = Field(default="", alias="painLocation")
    pain_duration: str = Field(default="", alias="painDuration")
    pain_type: str = Field(default="", alias="painType", description="Comma-joined tags")
    mechanism_of_injury: str = Field(default="", alias="mechanismOfInjury")
    medications: str = Field(default="")
    additional_symptoms: List[str] = Field(default_factory=list, alias="additionalSymptoms")
    red_flags: List[str] = Field(default_factory=list, alias="redFlags")
    location: str = Field(default="")
    post_op: Optional[AppPostOpBlock] = Field(default=None, alias="postOp")

    @field_validator("pain_type", mode="before")
    @classmethod
    def join_pain_types(cls, value):
        if isinstance(value, list):
            return ", ".join(str(v) for v in value)
        return value

    def to_record(self) -> AssessmentRecord:
        return AssessmentRecord(
            pain_level=self.pain_level,
            pain_location=self.pain_location,
            pain_duration=self.pain_duration,
            pain_type=self.pain_type,
            mechanism_of_injury=self.mechanism_of_injury,
            medications=self.medications,
            additional_symptoms=self.additional_symptoms,
            red_flags=self.red_flags,
            location=self.location,
            post_op=self.post_op.to_record() if self.post_op else None,
        )


class AppRecommendation(BaseModel):
    """Recommended exercise"""

    model_config = ConfigDict(populate_by_name=True)

    exercise_id: str = Field(..., alias="exerciseId")
    title: str
    description: str = ""
    difficulty: str
    body_parts: List[str] = Field(default_factory=list, alias="bodyParts")
    video_url: Optional[str] = Field(default=None, alias="videoUrl")
    sets: Optional[int] = None
    reps: Optional[int] = None
    hold_seconds: Optional[int] = Field(default=None, alias="holdSeconds")
    frequency: Optional[str] = None
    relevance_score: int = Field(..., alias="relevanceScore")
    reasoning: str = ""
    safety_notes: List[str] = Field(default_factory=list, alias="safetyNotes")
    red_flag_warnings: List[str] = Field(default_factory=list, alias="redFlagWarnings")
    progression_tips: List[str] = Field(default_factory=list, alias="progressionTips")

    @classmethod
    def from_recommendation(cls, rec: Recommendation) -> "AppRecommendation":
        exercise = rec.exercise
        return cls(
            exercise_id=exercise.id,
            title=exercise.title,
            description=exercise.description,
            difficulty=exercise.difficulty,
            body_parts=exercise.body_parts,
            video_url=exercise.video_url,
            sets=rec.dosage.sets,
            reps=rec.dosage.reps,
            hold_seconds=rec.dosage.hold_seconds,
            frequency=rec.dosage.frequency,
            relevance_score=rec.relevance_score,
            reasoning=rec.reasoning,
            safety_notes=rec.safety_notes,
            red_flag_warnings=rec.red_flag_warnings,
            progression_tips=rec.progression_tips,
        )


class AppAssessmentResponse(BaseModel):
    """App assessment result"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    risk_level: str = Field(..., alias="riskLevel")
    recommendations: List[AppRecommendation] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list, alias="nextSteps")
    source: str = Field(..., description="protocol, routine, scored, none")
    routine_name: Optional[str] = Field(default=None, alias="routineName")
    protocol_key: Optional[str] = Field(default=None, alias="protocolKey")
    phase_number: Optional[int] = Field(default=None, alias="phaseNumber")
    phase_name: Optional[str] = Field(default=None, alias="phaseName")
    advisory_notes: List[str] = Field(default_factory=list, alias="advisoryNotes")
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_result(cls, result: AssessmentResult) -> "AppAssessmentResponse":
        return cls(
            id=result.id,
            risk_level=result.risk_level.value,
            recommendations=[
                AppRecommendation.from_recommendation(r) for r in result.recommendations
            ],
            next_steps=result.next_steps,
            source=result.source,
            routine_name=result.routine_name,
            protocol_key=result.phase.protocol_key if result.phase else None,
            phase_number=result.phase.phase_number if result.phase else None,
            phase_name=result.phase_name,
            advisory_notes=result.advisory_notes,
            created_at=result.created_at,
        )


class AppOutcomeRequest(BaseModel):
    """Questionnaire submission"""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "contextType": "baseline",
                "conditionTag": "back",
                "responses": {"ODI_Q1": 2, "ODI_Q2": 1, "ODI_Q3": 3},
            }
        },
    )

    context_type: Literal["baseline", "followup", "final"] = Field(..., alias="contextType")
    condition_tag: Optional[str] = Field(default=None, alias="conditionTag")
    pain_location: Optional[str] = Field(
        default=None, alias="painLocation", description="Used when conditionTag is omitted"
    )
    responses: Dict[str, Optional[Union[int, float]]] = Field(
        default_factory=dict, description="item id or itemKey -> response"
    )
    related_assessment_id: Optional[str] = Field(default=None, alias="relatedAssessmentId")


class AppOutcomeResponse(BaseModel):
    """Scored outcome assessment"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    questionnaire_key: str = Field(..., alias="questionnaireKey")
    context_type: str = Field(..., alias="contextType")
    condition_tag: str = Field(..., alias="conditionTag")
    total_score: Optional[float] = Field(default=None, alias="totalScore")
    normalized_score: Optional[float] = Field(default=None, alias="normalizedScore")
    interpretation: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_assessment(cls, assessment: OutcomeAssessment) -> "AppOutcomeResponse":
        return cls(
            id=assessment.id,
            questionnaire_key=assessment.questionnaire_key,
            context_type=assessment.context_type,
            condition_tag=assessment.condition_tag,
            total_score=assessment.total_score,
            normalized_score=assessment.normalized_score,
            interpretation=assessment.interpretation,
            created_at=assessment.created_at,
        )


def _score(assessment: Optional[OutcomeAssessment]) -> Optional[float]:
    return assessment.normalized_score if assessment else None


class AppOutcomeSummaryResponse(BaseModel):
    """Outcome progress for one condition"""

    model_config = ConfigDict(populate_by_name=True)

    condition_tag: str = Field(..., alias="conditionTag")
    function_questionnaire_key: str = Field(..., alias="functionQuestionnaireKey")
    baseline_function_score: Optional[float] = Field(default=None, alias="baselineFunctionScore")
    baseline_pain_score: Optional[float] = Field(default=None, alias="baselinePainScore")
    baseline_date: Optional[datetime] = Field(default=None, alias="baselineDate")
    latest_function_score: Optional[float] = Field(default=None, alias="latestFunctionScore")
    latest_pain_score: Optional[float] = Field(default=None, alias="latestPainScore")
    latest_date: Optional[datetime] = Field(default=None, alias="latestDate")
    final_groc_score: Optional[float] = Field(default=None, alias="finalGrocScore")
    function_change: Optional[float] = Field(default=None, alias="functionChange")
    pain_change: Optional[float] = Field(default=None, alias="painChange")
    is_meaningful: bool = Field(default=False, alias="isMeaningful")
    function_improved: Optional[bool] = Field(default=None, alias="functionImproved")
    needs_follow_up: bool = Field(default=True, alias="needsFollowUp")

    @classmethod
    def from_summary(
        cls, summary: OutcomeSummary, needs_follow_up: bool
    ) -> "AppOutcomeSummaryResponse":
        return cls(
            condition_tag=summary.condition_tag,
            function_questionnaire_key=summary.function_questionnaire_key,
            baseline_function_score=_score(summary.baseline_function),
            baseline_pain_score=_score(summary.baseline_pain),
            baseline_date=summary.baseline_date,
            latest_function_score=_score(summary.latest_function),
            latest_pain_score=_score(summary.latest_pain),
            latest_date=summary.latest_date,
            final_groc_score=_score(summary.final_groc),
            function_change=summary.function_change,
            pain_change=summary.pain_change,
            is_meaningful=summary.is_meaningful,
            function_improved=summary.function_improved,
            needs_follow_up=needs_follow_up,
        )


class AppQuestionnaireItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    item_key: str = Field(..., alias="itemKey")
    prompt_text: Optional[str] = Field(default=None, alias="promptText")
    response_type: str = Field(..., alias="responseType")
    display_order: int = Field(..., alias="displayOrder")
    is_required: bool = Field(default=True, alias="isRequired")


class AppQuestionnaireResponse(BaseModel):
    """Questionnaire with ordered items"""

    model_config = ConfigDict(populate_by_name=True)

    key: str
    display_name: str = Field(..., alias="displayName")
    body_region: str = Field(..., alias="bodyRegion")
    scoring_type: str = Field(..., alias="scoringType")
    mcid: Optional[float] = None
    items: List[AppQuestionnaireItem] = Field(default_factory=list)

    @classmethod
    def from_questionnaire(
        cls, questionnaire: Questionnaire, items: List[QuestionnaireItem]
    ) -> "AppQuestionnaireResponse":
        return cls(
            key=questionnaire.key,
            display_name=questionnaire.display_name,
            body_region=questionnaire.body_region,
            scoring_type=questionnaire.scoring_type.value,
            mcid=questionnaire.mcid,
            items=[
                AppQuestionnaireItem(
                    id=item.id,
                    item_key=item.item_key,
                    prompt_text=item.prompt_text,
                    response_type=item.response_type,
                    display_order=item.display_order,
                    is_required=item.is_required,
                )
                for item in items
            ],
        )
