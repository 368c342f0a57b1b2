"""Service for logged meals."""

from collections.abc import Mapping
from dataclasses import dataclass

from fitness_tracker.domain.meals import DailyIntake, Meal, group_meals_by_day
from fitness_tracker.services.base import EntityService


@dataclass
class MealService(EntityService[Meal]):
    """Meals with a cached list and per-day grouping."""

    def parse(self, payload: Mapping[str, object]) -> Meal:
        return Meal.from_payload(payload)

    def daily_intakes(self) -> list[DailyIntake]:
        """Group the cached meals by day, most recent first."""
        return group_meals_by_day(self.items)
