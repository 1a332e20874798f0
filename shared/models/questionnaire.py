"""Outcome questionnaire models (shared)"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class ScoringFormula(str, Enum):
    """Standardized outcome measures"""

    ODI = "odi"
    KOOS = "koos"
    QUICKDASH = "quickdash"
    NPRS = "nprs"
    GROC = "groc"

    @property
    def lower_is_better(self) -> bool:
        """Disability indices improve downward; KOOS, GROC improve upward"""
        return self in (ScoringFormula.ODI, ScoringFormula.QUICKDASH, ScoringFormula.NPRS)


ResponseType = Literal[
    "likert_0_5",
    "likert_0_4",
    "likert_1_5",
    "nprs_0_10",
    "groc_-7_7",
]


class Questionnaire(BaseModel):
    """Questionnaire definition"""

    id: str
    key: str = Field(..., description="odi, koos, quickdash, nprs, groc")
    display_name: str
    body_region: str = Field(default="general")
    version: Optional[str] = Field(default=None)
    scoring_type: ScoringFormula
    min_score: Optional[float] = Field(default=None)
    max_score: Optional[float] = Field(default=None)
    mcid: Optional[float] = Field(default=None, description="Minimal clinically important difference")
    notes: Optional[str] = Field(default=None)


class QuestionnaireItem(BaseModel):
    """Single questionnaire item"""

    id: str
    questionnaire_id: str
    item_key: str
    prompt_text: Optional[str] = Field(default=None)
    response_type: ResponseType
    display_order: int = Field(default=0)
    is_required: bool = Field(default=True)
