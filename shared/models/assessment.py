"""Patient intake models (shared)"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RiskLevel(str, Enum):
    """Triage tier

    Ordered low < moderate < high < critical for display only.
    """

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RISK_ORDER.index(self)


_RISK_ORDER = [RiskLevel.LOW, RiskLevel.MODERATE, RiskLevel.HIGH, RiskLevel.CRITICAL]


def _dedupe(values: List[str]) -> List[str]:
    """Drop blanks and case-insensitive duplicates, keeping first spelling"""
    seen = set()
    result = []
    for value in values:
        cleaned = value.strip()
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        result.append(cleaned)
    return result


class PostOpRecord(BaseModel):
    """Post-operative intake block

    Only meaningful when surgery_status is "post_op". Region, surgery type
    and modifier arrive exactly as the intake wizard collected them.
    """

    model_config = ConfigDict(frozen=True)

    surgery_status: Literal["no_surgery", "post_op", "not_sure"] = Field(
        default="no_surgery", description="Surgery status"
    )
    post_op_region: Optional[str] = Field(
        default=None, description="Shoulder, Knee, Hip, Elbow, Foot/Ankle"
    )
    surgery_type: Optional[str] = Field(
        default=None, description="Surgery type key (e.g. acl_reconstruction)"
    )
    procedure_modifier: Optional[str] = Field(
        default=None, description="Procedure detail (e.g. Grade 2 (Medium Tear))"
    )
    weeks_since_surgery: Optional[str] = Field(
        default=None, description="0-2 weeks, 2-6 weeks, 6-12 weeks, 12+ weeks"
    )
    weight_bearing_status: Optional[str] = Field(
        default=None, description="Weight-bearing status (lower extremity)"
    )
    surgeon_precautions: Optional[Literal["yes", "no", "not_sure"]] = Field(
        default=None, description="Surgeon-specified restrictions"
    )

    @property
    def is_post_op(self) -> bool:
        return self.surgery_status == "post_op"


class AssessmentRecord(BaseModel):
    """Self-reported symptom assessment

    Built once per submission and never mutated afterwards. Symptom and red
    flag lists behave as sets: duplicates are removed on construction.
    """

    model_config = ConfigDict(frozen=True)

    pain_level: int = Field(..., ge=0, le=10, description="Pain level (0-10)")
    pain_location: str = Field(default="", description="Body region (free text)")
    pain_duration: str = Field(default="", description="Duration bucket")
    pain_type: str = Field(default="", description="Comma-joined pain type tags")
    mechanism_of_injury: str = Field(default="", description="Free text, not parsed")
    medications: str = Field(default="", description="Free text, not parsed")
    additional_symptoms: List[str] = Field(default_factory=list)
    red_flags: List[str] = Field(default_factory=list)
    location: str = Field(default="", description="Residence (Texas hint only)")
    post_op: Optional[PostOpRecord] = Field(default=None)

    @field_validator("additional_symptoms", "red_flags")
    @classmethod
    def dedupe_tags(cls, v: List[str]) -> List[str]:
        return _dedupe(v)

    @property
    def is_post_op(self) -> bool:
        return self.post_op is not None and self.post_op.is_post_op

    @property
    def pain_type_tags(self) -> List[str]:
        """Individual pain type tags ("Dull/Aching, Sharp" -> dull, aching, sharp)"""
        tags = []
        for chunk in self.pain_type.replace("/", ",").split(","):
            tag = chunk.strip().lower()
            if tag and tag not in tags:
                tags.append(tag)
        return tags

    def combined_text(self) -> str:
        """Lowercased free text used by exclusion checks"""
        parts = [
            self.pain_location,
            self.pain_type,
            self.pain_duration,
            self.mechanism_of_injury,
            *self.additional_symptoms,
        ]
        return " ".join(p for p in parts if p).lower()
