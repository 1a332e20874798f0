"""In-memory catalog"""

from typing import Dict, Iterable, List, Optional

from shared.catalog.reader import CatalogReader, QuestionnaireReader
from shared.models import (
    ExerciseRecord,
    PhaseExercise,
    ProtocolRecord,
    Questionnaire,
    QuestionnaireItem,
    RoutineItem,
    RoutineRecord,
)


class InMemoryCatalog(CatalogReader, QuestionnaireReader):
    """Catalog held in memory

    Serves as the loaded form of the JSON catalog and as a test double.
    Listings keep insertion order; inactive records are hidden.
    """

    def __init__(
        self,
        exercises: Iterable[ExerciseRecord] = (),
        routines: Iterable[RoutineRecord] = (),
        routine_items: Optional[Dict[str, List[RoutineItem]]] = None,
        protocols: Iterable[ProtocolRecord] = (),
        phase_exercises: Optional[Dict[str, List[PhaseExercise]]] = None,
        questionnaires: Iterable[Questionnaire] = (),
        questionnaire_items: Optional[Dict[str, List[QuestionnaireItem]]] = None,
    ):
        self._exercises = list(exercises)
        self._routines = list(routines)
        self._routine_items = dict(routine_items or {})
        self._protocols = {p.protocol_key: p for p in protocols}
        self._phase_exercises = dict(phase_exercises or {})
        self._questionnaires = {q.key: q for q in questionnaires}
        self._questionnaire_items = dict(questionnaire_items or {})

    def list_active_exercises(self) -> List[ExerciseRecord]:
        return [ex for ex in self._exercises if ex.is_active]

    def list_active_routines(self) -> List[RoutineRecord]:
        return [r for r in self._routines if r.is_active]

    def get_routine_items(self, routine_id: str) -> List[RoutineItem]:
        items = self._routine_items.get(routine_id, [])
        return sorted(
            (item for item in items if item.exercise.is_active),
            key=lambda item: item.sequence_order,
        )

    def find_protocol(self, protocol_key: str) -> Optional[ProtocolRecord]:
        protocol = self._protocols.get(protocol_key)
        if protocol is None or not protocol.is_active:
            return None
        return protocol

    def get_phase_exercises(
        self, protocol_id: str, phase_number: int
    ) -> List[PhaseExercise]:
        entries = [
            pe
            for pe in self._phase_exercises.get(protocol_id, [])
            if pe.phase_number == phase_number and pe.exercise.is_active
        ]
        return sorted(entries, key=lambda pe: pe.display_order)

    def get_questionnaire_by_key(self, key: str) -> Optional[Questionnaire]:
        return self._questionnaires.get(key)

    def get_items_for_questionnaire(
        self, questionnaire_id: str
    ) -> List[QuestionnaireItem]:
        items = self._questionnaire_items.get(questionnaire_id, [])
        return sorted(items, key=lambda item: item.display_order)
