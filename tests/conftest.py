"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime

import pytest

from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer, wire_container
from fitness_tracker.domain.foods import Food
from fitness_tracker.errors import ApiError
from fitness_tracker.services.base import RecordRepository


@dataclass
class FakeApiClient:
    """API client that records bodies and replays queued responses."""

    responses: list[object] = field(default_factory=list)
    bodies: list[dict[str, object]] = field(default_factory=list)
    closed: bool = False

    async def send(self, body: dict[str, object]) -> object:
        self.bodies.append(body)
        response = self.responses.pop(0) if self.responses else []
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


@dataclass
class InMemoryRecordRepository(RecordRepository):
    """In-memory record repository for tests."""

    entity_type: str = "Foods"
    records: dict[str, dict[str, object]] = field(default_factory=dict)
    fail_with: ApiError | None = None
    search_calls: list[str] = field(default_factory=list)

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def list_records(
        self, start: int = 0, count: int = 25, filters: dict[str, object] | None = None
    ) -> list[dict[str, object]]:
        self._check()
        return list(self.records.values())[start : start + count]

    async def get_by_id(self, record_id: str) -> dict[str, object]:
        self._check()
        if record_id not in self.records:
            raise ApiError(f"{self.entity_type} with id {record_id} not found", 404)
        return self.records[record_id]

    async def create(self, data: dict[str, object]) -> dict[str, object]:
        self._check()
        self.records[str(data["id"])] = data
        return data

    async def update(self, data: dict[str, object]) -> dict[str, object]:
        self._check()
        self.records[str(data["id"])] = data
        return data

    async def delete(self, record_id: str) -> None:
        self._check()
        self.records.pop(record_id, None)

    async def search(self, query: str) -> list[dict[str, object]]:
        self.search_calls.append(query)
        self._check()
        return [
            record
            for record in self.records.values()
            if query.lower() in str(record.get("name", "")).lower()
        ]


def make_food(  # noqa: PLR0913
    food_id: str,
    name: str = "",
    brand: str = "",
    protein: float = 0,
    fat: float = 0,
    carbs: float = 0,
    serving_size: float = 100,
    unit: str = "g",
) -> Food:
    food = Food(food_id, name=name, brand=brand)
    food.set_serving(serving_size, unit)
    food.set_nutrients(protein=protein, fat=fat, carbs=carbs)
    return food


def food_record(food_id: str, name: str, brand: str = "", **nutrients: float):
    return {
        "id": food_id,
        "name": name,
        "brand": brand,
        "type": "simple",
        "servingSize": 100,
        "servingSizeMeasurementType": "g",
        **nutrients,
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(api_url="https://api.test/controller.php")


@pytest.fixture
def api_client() -> FakeApiClient:
    return FakeApiClient()


@pytest.fixture
def container(settings: Settings, api_client: FakeApiClient) -> AppContainer:
    return wire_container(settings, api_client, api_client.close)


@pytest.fixture
def chicken() -> Food:
    return make_food("f-1", "Chicken Breast", "Kirkland", protein=31, fat=3.6)


@pytest.fixture
def morning() -> datetime:
    return datetime(2024, 3, 10, 8, 30)
