"""Exercise catalog models (shared)

Records owned by the external catalog. The engine only reads them.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


DEFAULT_SETS = 2
DEFAULT_FREQUENCY = "Daily"


class Dosage(BaseModel):
    """Exercise dosage

    Any field may be unset; resolve() fills gaps layer by layer.
    """

    sets: Optional[int] = Field(default=None, ge=1, description="Sets")
    reps: Optional[int] = Field(default=None, ge=1, description="Repetitions")
    hold_seconds: Optional[int] = Field(default=None, ge=1, description="Hold time (s)")
    frequency: Optional[str] = Field(default=None, description="e.g. 2-3x daily")

    @classmethod
    def resolve(cls, *layers: Optional["Dosage"]) -> "Dosage":
        """
        Merge dosage layers, highest precedence first

        Each field takes the first value set in any layer. Sets and frequency
        fall back to the engine default (2 sets, Daily).

        Args:
            layers: e.g. (phase override, routine item override, exercise default)

        Returns:
            Resolved Dosage
        """
        resolved = {}
        for field_name in ("sets", "reps", "hold_seconds", "frequency"):
            resolved[field_name] = next(
                (
                    getattr(layer, field_name)
                    for layer in layers
                    if layer is not None and getattr(layer, field_name) is not None
                ),
                None,
            )
        if resolved["sets"] is None:
            resolved["sets"] = DEFAULT_SETS
        if resolved["frequency"] is None:
            resolved["frequency"] = DEFAULT_FREQUENCY
        return cls(**resolved)


class ExerciseRecord(BaseModel):
    """Catalog exercise"""

    id: str = Field(..., description="Exercise ID")
    title: str = Field(..., description="Display name")
    description: str = Field(default="")
    body_parts: List[str] = Field(default_factory=list)
    conditions: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    difficulty: Literal["Beginner", "Intermediate", "Advanced"] = Field(
        default="Beginner"
    )
    contraindications: List[str] = Field(default_factory=list)
    safety_notes: List[str] = Field(default_factory=list)
    red_flag_warnings: List[str] = Field(default_factory=list)
    progression_tips: List[str] = Field(default_factory=list)
    display_order: int = Field(default=0, description="Curated order (tiebreaker)")
    is_featured: bool = Field(default=False)
    is_active: bool = Field(default=True)
    video_url: Optional[str] = Field(default=None)

    # recommended dosage
    sets: Optional[int] = Field(default=None, ge=1)
    reps: Optional[int] = Field(default=None, ge=1)
    hold_seconds: Optional[int] = Field(default=None, ge=1)
    frequency: Optional[str] = Field(default=None)

    @property
    def dosage(self) -> Dosage:
        return Dosage(
            sets=self.sets,
            reps=self.reps,
            hold_seconds=self.hold_seconds,
            frequency=self.frequency,
        )


class RoutineItem(BaseModel):
    """One step of a curated routine"""

    exercise: ExerciseRecord
    sequence_order: int = Field(..., ge=0)
    phase: Optional[str] = Field(default=None, description="e.g. Symptom Relief")
    phase_notes: Optional[str] = Field(default=None)
    transition_notes: Optional[str] = Field(default=None)
    is_optional: bool = Field(default=False)

    sets_override: Optional[int] = Field(default=None, ge=1)
    reps_override: Optional[int] = Field(default=None, ge=1)
    hold_seconds_override: Optional[int] = Field(default=None, ge=1)
    frequency_override: Optional[str] = Field(default=None)

    @property
    def dosage_override(self) -> Dosage:
        return Dosage(
            sets=self.sets_override,
            reps=self.reps_override,
            hold_seconds=self.hold_seconds_override,
            frequency=self.frequency_override,
        )


class RoutineRecord(BaseModel):
    """Curated multi-exercise routine"""

    id: str
    name: str
    slug: Optional[str] = Field(default=None)
    description: str = Field(default="")
    target_symptoms: List[str] = Field(default_factory=list)
    exclusion_criteria: List[str] = Field(default_factory=list)
    disclaimer: Optional[str] = Field(default=None)
    is_active: bool = Field(default=True)

    @property
    def search_text(self) -> str:
        return f"{self.name} {self.description}".lower()


class ProtocolPhase(BaseModel):
    """Named phase of a post-operative protocol"""

    phase_number: int = Field(..., ge=1)
    phase_name: str


class ProtocolRecord(BaseModel):
    """Post-operative rehabilitation protocol"""

    id: str
    protocol_key: str = Field(..., description="{region}_{surgery}[_{modifier}]")
    region: str
    surgery_name: str
    phases: List[ProtocolPhase] = Field(default_factory=list)
    is_active: bool = Field(default=True)

    def phase_name(self, phase_number: int) -> str:
        for phase in self.phases:
            if phase.phase_number == phase_number:
                return phase.phase_name
        return f"Phase {phase_number}"


class PhaseExercise(BaseModel):
    """Exercise assigned to a protocol phase"""

    exercise: ExerciseRecord
    phase_number: int = Field(..., ge=1)
    display_order: int = Field(default=0)
    phase_sets: Optional[int] = Field(default=None, ge=1)
    phase_reps: Optional[int] = Field(default=None, ge=1)
    phase_hold_seconds: Optional[int] = Field(default=None, ge=1)
    phase_frequency: Optional[str] = Field(default=None)
    phase_notes: Optional[str] = Field(default=None)

    @property
    def dosage_override(self) -> Dosage:
        return Dosage(
            sets=self.phase_sets,
            reps=self.phase_reps,
            hold_seconds=self.phase_hold_seconds,
            frequency=self.phase_frequency,
        )
