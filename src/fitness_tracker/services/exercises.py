"""Service for logged exercises."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from fitness_tracker.domain.exercise import Exercise, ExerciseName, ExerciseType
from fitness_tracker.domain.nutrients import round_half_up
from fitness_tracker.services.base import EntityService


@dataclass
class ExerciseService(EntityService[Exercise]):
    """Exercises with a cached list and training statistics."""

    def parse(self, payload: Mapping[str, object]) -> Exercise:
        return Exercise.from_payload(payload)

    def search_exercises(self, query: str) -> list[Exercise]:
        """Match movement name, activity or feedback against ``query``."""
        needle = query.lower()
        return [item for item in self.items if needle in item.search_text.lower()]

    def filter_by_type(self, activity: ExerciseType) -> list[Exercise]:
        return [item for item in self.items if item.activity == activity]

    def filter_by_name(self, name: ExerciseName) -> list[Exercise]:
        return [item for item in self.items if item.name == name]

    def get_total_volume(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> float:
        """Total weight moved, optionally limited to ``[start, end]``."""
        exercises = self.items
        if start is not None and end is not None:
            exercises = [item for item in exercises if start <= item.date <= end]
        return sum(item.total_weight_moved for item in exercises)

    def get_average_weight(self, name: ExerciseName) -> int:
        exercises = self.filter_by_name(name)
        if not exercises:
            return 0
        total = sum(item.weight for item in exercises)
        return int(round_half_up(total / len(exercises)))

    def get_personal_record(self, name: ExerciseName) -> float:
        exercises = self.filter_by_name(name)
        if not exercises:
            return 0
        return max(item.weight for item in exercises)
