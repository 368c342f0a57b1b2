"""Domain model for body-weight entries."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from fitness_tracker.domain.dates import parse_datetime
from fitness_tracker.domain.nutrients import parse_number


@dataclass
class Weight:
    """A body-weight measurement."""

    id: str
    date: datetime
    pounds: float

    def to_payload(self) -> dict[str, object]:
        return {"id": self.id, "date": self.date.isoformat(), "pounds": self.pounds}

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "Weight":
        return cls(
            id=str(payload.get("id", "")),
            date=parse_datetime(payload.get("date")),
            pounds=parse_number(payload.get("pounds")),
        )
