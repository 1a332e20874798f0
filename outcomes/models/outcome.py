"""Outcome assessment models"""

import uuid
from datetime import datetime, timezone
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field

from shared.models import ScoringFormula


ContextType = Literal["baseline", "followup", "final"]


class ScoreResult(BaseModel):
    """Output of one scoring formula"""

    total_score: float = Field(..., description="Raw total (1 decimal)")
    normalized_score: float = Field(..., description="Normalized score (1 decimal)")
    interpretation: str = Field(..., description="Clinical band")


class OutcomeAssessment(BaseModel):
    """Scored questionnaire submission"""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    questionnaire_id: str
    questionnaire_key: str
    scoring_type: ScoringFormula
    context_type: ContextType = Field(..., description="baseline, followup, final")
    condition_tag: str = Field(..., description="e.g. back, knee, shoulder")
    related_assessment_id: Optional[str] = Field(default=None)
    responses: Dict[str, float] = Field(
        default_factory=dict, description="item_id -> raw response"
    )
    total_score: Optional[float] = Field(default=None)
    normalized_score: Optional[float] = Field(default=None)
    interpretation: Optional[str] = Field(default=None)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class OutcomeSummary(BaseModel):
    """
    Baseline vs latest comparison for one condition

    Latest entries fall back to the baseline when no follow-up exists; the
    change fields then stay None.
    """

    condition_tag: str
    function_questionnaire_key: str

    baseline_function: Optional[OutcomeAssessment] = None
    baseline_pain: Optional[OutcomeAssessment] = None
    baseline_date: Optional[datetime] = None

    latest_function: Optional[OutcomeAssessment] = None
    latest_pain: Optional[OutcomeAssessment] = None
    latest_date: Optional[datetime] = None

    final_groc: Optional[OutcomeAssessment] = None
    final_date: Optional[datetime] = None

    function_change: Optional[float] = Field(
        default=None, description="latest - baseline (sign depends on formula)"
    )
    pain_change: Optional[float] = Field(default=None, description="latest - baseline NPRS")
    is_meaningful: bool = Field(default=False, description="Change reaches MCID")
    function_improved: Optional[bool] = Field(
        default=None, description="Direction of function change, None without a change"
    )
