"""TTL-cached catalog reader"""

from typing import List, Optional, Union

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
from shared.utils.cache import TTLCache


class CachedCatalogReader(CatalogReader, QuestionnaireReader):
    """Wraps a reader and caches each lookup for the cache TTL

    Read failures are never cached.
    """

    def __init__(
        self,
        reader: Union[CatalogReader, QuestionnaireReader],
        cache: TTLCache,
    ):
        """
        Args:
            reader: underlying reader
            cache: injected TTL cache
        """
        self._reader = reader
        self.cache = cache

    def list_active_exercises(self) -> List[ExerciseRecord]:
        return self.cache.get_or_load(
            ("exercises",), self._reader.list_active_exercises
        )

    def list_active_routines(self) -> List[RoutineRecord]:
        return self.cache.get_or_load(
            ("routines",), self._reader.list_active_routines
        )

    def get_routine_items(self, routine_id: str) -> List[RoutineItem]:
        return self.cache.get_or_load(
            ("routine_items", routine_id),
            lambda: self._reader.get_routine_items(routine_id),
        )

    def find_protocol(self, protocol_key: str) -> Optional[ProtocolRecord]:
        return self.cache.get_or_load(
            ("protocol", protocol_key),
            lambda: self._reader.find_protocol(protocol_key),
        )

    def get_phase_exercises(
        self, protocol_id: str, phase_number: int
    ) -> List[PhaseExercise]:
        return self.cache.get_or_load(
            ("phase_exercises", protocol_id, phase_number),
            lambda: self._reader.get_phase_exercises(protocol_id, phase_number),
        )

    def get_questionnaire_by_key(self, key: str) -> Optional[Questionnaire]:
        return self.cache.get_or_load(
            ("questionnaire", key),
            lambda: self._reader.get_questionnaire_by_key(key),
        )

    def get_items_for_questionnaire(
        self, questionnaire_id: str
    ) -> List[QuestionnaireItem]:
        return self.cache.get_or_load(
            ("questionnaire_items", questionnaire_id),
            lambda: self._reader.get_items_for_questionnaire(questionnaire_id),
        )
