"""Triage Services"""

from .risk_classifier import RiskClassifier, CONCERNING_SYMPTOMS
from .safety_notes import SafetyNoteComposer
from .routine_matcher import RoutineMatcher
from .exercise_scorer import ExerciseScorer
from .protocol_phase import ProtocolPhaseResolver, SEVERE_SYMPTOMS
from .next_steps import NextStepPlanner
from .safety_assistant import SafetyNoteAssistant

__all__ = [
    "RiskClassifier",
    "CONCERNING_SYMPTOMS",
    "SafetyNoteComposer",
    "RoutineMatcher",
    "ExerciseScorer",
    "ProtocolPhaseResolver",
    "SEVERE_SYMPTOMS",
    "NextStepPlanner",
    "SafetyNoteAssistant",
]
