"""Catalog reader contract

Read-only access to the exercise, routine, protocol and questionnaire
catalog. "No rows" is reported with None or an empty list; an unreadable
backing store raises CatalogUnavailableError.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from shared.models import (
    ExerciseRecord,
    PhaseExercise,
    ProtocolRecord,
    Questionnaire,
    QuestionnaireItem,
    RoutineItem,
    RoutineRecord,
)


class CatalogUnavailableError(RuntimeError):
    """The catalog backing store could not be read"""


class CatalogReader(ABC):
    """Exercise / routine / protocol reader"""

    @abstractmethod
    def list_active_exercises(self) -> List[ExerciseRecord]:
        ...

    @abstractmethod
    def list_active_routines(self) -> List[RoutineRecord]:
        ...

    @abstractmethod
    def get_routine_items(self, routine_id: str) -> List[RoutineItem]:
        ...

    @abstractmethod
    def find_protocol(self, protocol_key: str) -> Optional[ProtocolRecord]:
        ...

    @abstractmethod
    def get_phase_exercises(
        self, protocol_id: str, phase_number: int
    ) -> List[PhaseExercise]:
        ...


class QuestionnaireReader(ABC):
    """Questionnaire reader"""

    @abstractmethod
    def get_questionnaire_by_key(self, key: str) -> Optional[Questionnaire]:
        ...

    @abstractmethod
    def get_items_for_questionnaire(
        self, questionnaire_id: str
    ) -> List[QuestionnaireItem]:
        ...
