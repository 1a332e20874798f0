"""JSON file catalog reader

Layout under data_dir:
    catalog/exercises.json      {"exercises": {id: {...}}}
    catalog/routines.json       {"routines": {id: {..., "items": [...]}}}
    catalog/protocols.json      {"protocols": {id: {..., "phase_exercises": [...]}}}
    outcomes/questionnaires.json {"questionnaires": {id: {..., "items": [...]}}}

Keys starting with "_" (e.g. _metadata) are skipped.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from shared.catalog.memory import InMemoryCatalog
from shared.catalog.reader import (
    CatalogReader,
    CatalogUnavailableError,
    QuestionnaireReader,
)
from shared.models import (
    ExerciseRecord,
    PhaseExercise,
    ProtocolRecord,
    Questionnaire,
    QuestionnaireItem,
    RoutineItem,
    RoutineRecord,
)

logger = logging.getLogger(__name__)


class JsonCatalogReader(CatalogReader, QuestionnaireReader):
    """Catalog reader backed by JSON seed files

    Files are re-read on every call, and a lookup only reads the files it
    needs; wrap in CachedCatalogReader for reuse.
    """

    def __init__(self, data_dir: Path):
        """
        Args:
            data_dir: data directory containing catalog/ and outcomes/
        """
        self.data_dir = Path(data_dir)

    def _read_section(self, relative_path: str, section: str) -> Dict[str, dict]:
        path = self.data_dir / relative_path
        if not path.exists():
            raise CatalogUnavailableError(f"Catalog file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogUnavailableError(f"Catalog file unreadable: {path}: {e}") from e

        entries = raw_data.get(section, raw_data)
        if not isinstance(entries, dict):
            raise CatalogUnavailableError(f"'{section}' in {path} must be an object")

        return {
            entry_id: {**data, "id": entry_id}
            for entry_id, data in entries.items()
            if not entry_id.startswith("_")
        }

    def _load_exercise_index(self) -> Dict[str, ExerciseRecord]:
        raw = self._read_section("catalog/exercises.json", "exercises")
        try:
            return {ex_id: ExerciseRecord(**data) for ex_id, data in raw.items()}
        except ValidationError as e:
            raise CatalogUnavailableError(f"Invalid exercise record: {e}") from e

    def _resolve_exercise(
        self, index: Dict[str, ExerciseRecord], exercise_id: str, owner: str
    ) -> ExerciseRecord:
        if exercise_id not in index:
            raise CatalogUnavailableError(
                f"{owner} references unknown exercise '{exercise_id}'"
            )
        return index[exercise_id]

    def _load_routines(
        self, exercise_index: Dict[str, ExerciseRecord]
    ) -> Tuple[List[RoutineRecord], Dict[str, List[RoutineItem]]]:
        routines: List[RoutineRecord] = []
        routine_items: Dict[str, List[RoutineItem]] = {}
        try:
            for routine_id, data in self._read_section(
                "catalog/routines.json", "routines"
            ).items():
                items = data.pop("items", [])
                routines.append(RoutineRecord(**data))
                routine_items[routine_id] = [
                    RoutineItem(
                        exercise=self._resolve_exercise(
                            exercise_index, item.pop("exercise_id"), routine_id
                        ),
                        **item,
                    )
                    for item in items
                ]
        except (ValidationError, KeyError, TypeError) as e:
            raise CatalogUnavailableError(f"Invalid routine record: {e}") from e
        return routines, routine_items

    def _load_protocols(
        self, exercise_index: Dict[str, ExerciseRecord]
    ) -> Tuple[List[ProtocolRecord], Dict[str, List[PhaseExercise]]]:
        protocols: List[ProtocolRecord] = []
        phase_exercises: Dict[str, List[PhaseExercise]] = {}
        try:
            for protocol_id, data in self._read_section(
                "catalog/protocols.json", "protocols"
            ).items():
                entries = data.pop("phase_exercises", [])
                protocols.append(ProtocolRecord(**data))
                phase_exercises[protocol_id] = [
                    PhaseExercise(
                        exercise=self._resolve_exercise(
                            exercise_index, entry.pop("exercise_id"), protocol_id
                        ),
                        **entry,
                    )
                    for entry in entries
                ]
        except (ValidationError, KeyError, TypeError) as e:
            raise CatalogUnavailableError(f"Invalid protocol record: {e}") from e
        return protocols, phase_exercises

    def _load_questionnaires(
        self,
    ) -> Tuple[List[Questionnaire], Dict[str, List[QuestionnaireItem]]]:
        questionnaires: List[Questionnaire] = []
        questionnaire_items: Dict[str, List[QuestionnaireItem]] = {}
        try:
            for questionnaire_id, data in self._read_section(
                "outcomes/questionnaires.json", "questionnaires"
            ).items():
                items = data.pop("items", [])
                questionnaires.append(Questionnaire(**data))
                questionnaire_items[questionnaire_id] = [
                    QuestionnaireItem(questionnaire_id=questionnaire_id, **item)
                    for item in items
                ]
        except (ValidationError, KeyError, TypeError) as e:
            raise CatalogUnavailableError(f"Invalid questionnaire record: {e}") from e
        return questionnaires, questionnaire_items

    def load(self) -> InMemoryCatalog:
        """Read every catalog file into an InMemoryCatalog"""
        exercise_index = self._load_exercise_index()
        routines, routine_items = self._load_routines(exercise_index)
        protocols, phase_exercises = self._load_protocols(exercise_index)
        questionnaires, questionnaire_items = self._load_questionnaires()

        logger.debug(
            "Catalog loaded: %d exercises, %d routines, %d protocols, %d questionnaires",
            len(exercise_index),
            len(routines),
            len(protocols),
            len(questionnaires),
        )

        return InMemoryCatalog(
            exercises=exercise_index.values(),
            routines=routines,
            routine_items=routine_items,
            protocols=protocols,
            phase_exercises=phase_exercises,
            questionnaires=questionnaires,
            questionnaire_items=questionnaire_items,
        )

    # each lookup reads only the files it depends on

    def list_active_exercises(self) -> List[ExerciseRecord]:
        return InMemoryCatalog(
            exercises=self._load_exercise_index().values()
        ).list_active_exercises()

    def _routine_catalog(self) -> InMemoryCatalog:
        routines, routine_items = self._load_routines(self._load_exercise_index())
        return InMemoryCatalog(routines=routines, routine_items=routine_items)

    def list_active_routines(self) -> List[RoutineRecord]:
        return self._routine_catalog().list_active_routines()

    def get_routine_items(self, routine_id: str) -> List[RoutineItem]:
        return self._routine_catalog().get_routine_items(routine_id)

    def _protocol_catalog(self) -> InMemoryCatalog:
        protocols, phase_exercises = self._load_protocols(self._load_exercise_index())
        return InMemoryCatalog(protocols=protocols, phase_exercises=phase_exercises)

    def find_protocol(self, protocol_key: str) -> Optional[ProtocolRecord]:
        return self._protocol_catalog().find_protocol(protocol_key)

    def get_phase_exercises(
        self, protocol_id: str, phase_number: int
    ) -> List[PhaseExercise]:
        return self._protocol_catalog().get_phase_exercises(protocol_id, phase_number)

    def _questionnaire_catalog(self) -> InMemoryCatalog:
        questionnaires, questionnaire_items = self._load_questionnaires()
        return InMemoryCatalog(
            questionnaires=questionnaires, questionnaire_items=questionnaire_items
        )

    def get_questionnaire_by_key(self, key: str) -> Optional[Questionnaire]:
        return self._questionnaire_catalog().get_questionnaire_by_key(key)

    def get_items_for_questionnaire(
        self, questionnaire_id: str
    ) -> List[QuestionnaireItem]:
        return self._questionnaire_catalog().get_items_for_questionnaire(questionnaire_id)
