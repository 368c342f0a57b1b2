"""Domain models for logged exercises."""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum

from fitness_tracker.domain.dates import parse_datetime
from fitness_tracker.domain.nutrients import parse_number


class ExerciseType(IntEnum):
    """Kind of activity; stored by index on the API."""

    LIFT = 0
    CARDIO = 1
    STRETCH = 2


class ExerciseName(IntEnum):
    """Movements that can be logged; stored by index on the API."""

    # Chest
    BENCH_PRESS = 0
    CLOSE_GRIP_BENCH_PRESS = 1
    DUMBELL_FLY = 2
    # Shoulders
    OVERHEAD_BARBELL_PRESS = 3
    OVERHEAD_DUMBELL_PRESS = 4
    DUMBELL_FRONT_RAISE = 5
    DUMBELL_LATERAL_RAISE = 6
    # Arms
    TRICEP_EXTENTION = 7
    TRICEP_PRESS_DOWN = 8
    SKULL_CRUSHERS = 9
    BICEP_CURL = 10
    # Back
    DEADLIFT = 11
    BARBELL_ROW = 12
    DUMBELL_ROW = 13
    GOOD_MORNING = 14
    LAT_PULL_DOWN = 15
    SHRUGS = 16
    FACE_PULLS = 17
    # Core
    SITUP = 18
    LEG_RAISE = 19
    PLANK = 20
    # Legs
    SQUAT = 21
    SPLIT_SQUAT = 22
    BODYWEIGHT_SQUAT = 23
    LUNGE = 24
    # Cardio
    ELIPTICAL = 25
    DUMBELL_SWINGS = 26
    WALK = 27
    # Stretches
    STRETCH_NECK_ROLL_AROUND = 28
    STRETCH_HAMSTRING_TOE_GRAB = 29
    STRETCH_CALF = 30
    STRETCH_SHOULDERS = 31
    STRETCH_INNER_THIGH = 32
    STRETCH_ANKLES = 33


def enum_label(member: IntEnum) -> str:
    """Human readable label for an enum member, e.g. ``Bench Press``."""
    return member.name.replace("_", " ").title()


@dataclass
class Exercise:
    """A logged set of work for one movement."""

    id: str
    date: datetime
    activity: ExerciseType = ExerciseType.LIFT
    name: ExerciseName = ExerciseName.BENCH_PRESS
    sets: int = 0
    reps: int = 0
    weight: float = 0.0
    feedback: str = ""

    @property
    def total_weight_moved(self) -> float:
        return self.weight * self.reps * self.sets

    @property
    def search_text(self) -> str:
        """Text matched by list search: movement, activity and feedback."""
        return f"{enum_label(self.name)} {enum_label(self.activity)} {self.feedback}"

    def to_payload(self) -> dict[str, object]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "activity": int(self.activity),
            "name": int(self.name),
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "feedback": self.feedback,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "Exercise":
        return cls(
            id=str(payload.get("id", "")),
            date=parse_datetime(payload.get("date")),
            activity=_parse_enum(ExerciseType, payload.get("activity")),
            name=_parse_enum(ExerciseName, payload.get("name")),
            sets=int(parse_number(payload.get("sets"))),
            reps=int(parse_number(payload.get("reps"))),
            weight=parse_number(payload.get("weight")),
            feedback=str(payload.get("feedback") or ""),
        )


def _parse_enum(enum_cls: type[IntEnum], raw: object) -> IntEnum:
    """Accept an enum index or a member name such as ``BenchPress``."""
    if isinstance(raw, str) and not raw.strip().isdigit():
        key = re.sub(r"(?<!^)(?=[A-Z])", "_", raw.strip()).upper()
        return enum_cls[key]
    return enum_cls(int(parse_number(raw)))
