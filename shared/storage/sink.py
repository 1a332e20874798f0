"""Result persistence sink

The engines decide what is written; a sink decides how it is stored.
"""

import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import TYPE_CHECKING, Deque, List, Optional

if TYPE_CHECKING:
    from outcomes.models import OutcomeAssessment
    from triage.models import AssessmentResult


MAX_ASSESSMENT_HISTORY = 10


class ResultSink(ABC):
    """Storage contract for assessment results and outcome assessments"""

    @abstractmethod
    def save_assessment(self, result: "AssessmentResult") -> None:
        ...

    @abstractmethod
    def recent_assessments(self) -> List["AssessmentResult"]:
        """Stored results, newest first"""

    def latest_assessment(self) -> Optional["AssessmentResult"]:
        recent = self.recent_assessments()
        return recent[0] if recent else None

    @abstractmethod
    def save_outcome(self, assessment: "OutcomeAssessment") -> None:
        ...

    @abstractmethod
    def outcome_history(self, condition_tag: str) -> List["OutcomeAssessment"]:
        """Outcome assessments for one condition, oldest first"""


class InMemoryResultSink(ResultSink):
    """Process-local sink

    Keeps the most recent assessment results (newest first) and every
    outcome assessment.
    """

    def __init__(self, max_assessments: int = MAX_ASSESSMENT_HISTORY):
        self._assessments: Deque["AssessmentResult"] = deque(maxlen=max_assessments)
        self._outcomes: List["OutcomeAssessment"] = []
        self._lock = threading.Lock()

    def save_assessment(self, result: "AssessmentResult") -> None:
        with self._lock:
            self._assessments.appendleft(result)

    def recent_assessments(self) -> List["AssessmentResult"]:
        with self._lock:
            return list(self._assessments)

    def save_outcome(self, assessment: "OutcomeAssessment") -> None:
        with self._lock:
            self._outcomes.append(assessment)

    def outcome_history(self, condition_tag: str) -> List["OutcomeAssessment"]:
        with self._lock:
            matching = [
                a for a in self._outcomes if a.condition_tag == condition_tag
            ]
        return sorted(matching, key=lambda a: a.created_at)
