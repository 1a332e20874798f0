"""Shared models"""

from .assessment import AssessmentRecord, PostOpRecord, RiskLevel
from .catalog import (
    Dosage,
    ExerciseRecord,
    PhaseExercise,
    ProtocolPhase,
    ProtocolRecord,
    RoutineItem,
    RoutineRecord,
)
from .questionnaire import Questionnaire, QuestionnaireItem, ScoringFormula

__all__ = [
    "AssessmentRecord",
    "PostOpRecord",
    "RiskLevel",
    "Dosage",
    "ExerciseRecord",
    "PhaseExercise",
    "ProtocolPhase",
    "ProtocolRecord",
    "RoutineItem",
    "RoutineRecord",
    "Questionnaire",
    "QuestionnaireItem",
    "ScoringFormula",
]
