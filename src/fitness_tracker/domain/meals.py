"""Domain models for logged meals and daily intake."""

from collections.abc import Iterable, Mapping
from datetime import date, datetime

from fitness_tracker.domain.dates import parse_datetime
from fitness_tracker.domain.foods import BaseFood, Part, new_part_id
from fitness_tracker.domain.nutrients import (
    MacroBreakdown,
    NutrientProfile,
    sum_profiles,
)


class Meal:
    """Foods eaten together at a point in time.

    Like a recipe, a meal keeps its totals current: each mutation of its
    parts recomputes ``totals`` before returning.
    """

    def __init__(
        self,
        id: str,  # noqa: A002
        date: datetime,
        name: str = "",
        parts: Iterable[Part] = (),
    ) -> None:
        self._id = id
        self.date = date
        self.name = name
        self._parts: list[Part] = list(parts)
        self._totals = NutrientProfile()
        self._recompute()

    def __repr__(self) -> str:
        return f"Meal(id={self._id!r}, name={self.name!r}, date={self.date!r})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def parts(self) -> tuple[Part, ...]:
        return tuple(self._parts)

    @property
    def totals(self) -> NutrientProfile:
        return self._totals

    @property
    def total_calories(self) -> int:
        """Sum of each part's own rounded calories."""
        return sum(part.calories for part in self._parts)

    @property
    def macro_breakdown(self) -> MacroBreakdown:
        return self._totals.macro_breakdown

    def set_name(self, name: str) -> "Meal":
        self.name = name
        return self

    def set_date(self, value: datetime | str) -> "Meal":
        self.date = parse_datetime(value)
        return self

    def add_part(self, food: BaseFood, amount: float, unit: str) -> Part:
        part = Part(id=new_part_id(), food=food, amount=amount, unit=unit)
        self._parts.append(part)
        self._recompute()
        return part

    def remove_part(self, part_id: str) -> "Meal":
        self._parts = [part for part in self._parts if part.id != part_id]
        self._recompute()
        return self

    def update_part(
        self, part_id: str, amount: float, unit: str | None = None
    ) -> "Meal":
        self._parts = [
            part.with_amount(amount, unit) if part.id == part_id else part
            for part in self._parts
        ]
        self._recompute()
        return self

    def set_parts(self, parts: Iterable[Part]) -> "Meal":
        self._parts = list(parts)
        self._recompute()
        return self

    def refresh(self) -> "Meal":
        self._recompute()
        return self

    def _recompute(self) -> None:
        self._totals = sum_profiles(part.nutrients for part in self._parts)

    def to_payload(self) -> dict[str, object]:
        return {
            "id": self._id,
            "name": self.name,
            "date": self.date.isoformat(),
            "parts": [part.to_payload() for part in self._parts],
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "Meal":
        """Build a meal from an API record; older records call parts ``entries``."""
        raw_parts = payload.get("parts") or payload.get("entries") or []
        return cls(
            str(payload.get("id", "")),
            date=parse_datetime(payload.get("date")),
            name=str(payload.get("name") or ""),
            parts=[Part.from_payload(raw) for raw in raw_parts],  # type: ignore[union-attr]
        )


class DailyIntake:
    """All meals logged on one calendar day."""

    def __init__(self, day: date, meals: Iterable[Meal] = ()) -> None:
        self.day = day
        self._meals: list[Meal] = list(meals)

    @property
    def meals(self) -> tuple[Meal, ...]:
        return tuple(self._meals)

    @property
    def totals(self) -> NutrientProfile:
        return sum_profiles(meal.totals for meal in self._meals)

    @property
    def calories(self) -> int:
        """Calories derived from the day's summed macros."""
        return self.totals.calories

    @property
    def total_calories(self) -> int:
        return sum(meal.total_calories for meal in self._meals)

    @property
    def macro_breakdown(self) -> MacroBreakdown:
        return self.totals.macro_breakdown

    @property
    def meal_count(self) -> int:
        return len(self._meals)

    @property
    def has_meals(self) -> bool:
        return bool(self._meals)

    def add_meal(self, meal: Meal) -> "DailyIntake":
        self._meals.append(meal)
        return self

    def remove_meal(self, meal_id: str) -> "DailyIntake":
        self._meals = [meal for meal in self._meals if meal.id != meal_id]
        return self

    def get_meal(self, meal_id: str) -> Meal | None:
        return next((meal for meal in self._meals if meal.id == meal_id), None)


def group_meals_by_day(meals: Iterable[Meal]) -> list[DailyIntake]:
    """Group meals into daily intakes, most recent day first."""
    days: dict[date, DailyIntake] = {}
    for meal in meals:
        day = meal.date.date()
        days.setdefault(day, DailyIntake(day)).add_meal(meal)
    return [days[day] for day in sorted(days, reverse=True)]

