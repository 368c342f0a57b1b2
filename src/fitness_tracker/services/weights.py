"""Service for body-weight entries."""

from collections.abc import Mapping
from dataclasses import dataclass

from fitness_tracker.domain.weight import Weight
from fitness_tracker.services.base import EntityService


@dataclass
class WeightService(EntityService[Weight]):
    """Weight entries with a cached list."""

    def parse(self, payload: Mapping[str, object]) -> Weight:
        return Weight.from_payload(payload)

    def latest(self) -> Weight | None:
        """Most recent cached entry, if any."""
        return max(self.items, key=lambda item: item.date, default=None)
