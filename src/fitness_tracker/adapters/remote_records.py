"""Remote API implementation of per-entity record storage."""

from dataclasses import dataclass

from fitness_tracker.adapters.api_client import ApiClient
from fitness_tracker.errors import ApiError
from fitness_tracker.services.base import RecordRepository


@dataclass
class RemoteRecordRepository(RecordRepository):
    """Sends list/detail/create/update/delete actions for one entity type."""

    client: ApiClient
    entity_type: str

    async def list_records(
        self, start: int = 0, count: int = 25, filters: dict[str, object] | None = None
    ) -> list[dict[str, object]]:
        """Return a page of raw records."""
        body: dict[str, object] = {
            "action": "list",
            "type": self.entity_type,
            "start": start,
            "count": count,
        }
        if filters:
            body["filters"] = filters
        return self._records(await self.client.send(body), "list")

    async def get_by_id(self, record_id: str) -> dict[str, object]:
        """Return one raw record by id."""
        response = await self.client.send(
            {"action": "detail", "type": self.entity_type, "object": {"id": record_id}}
        )
        records = self._records(response, "detail")
        if not records:
            raise ApiError(
                f"{self.entity_type} with id {record_id} not found", status_code=404
            )
        return records[0]

    async def create(self, data: dict[str, object]) -> dict[str, object]:
        """Create a record; the API may echo nothing, so fall back to ``data``."""
        return await self._write("create", data)

    async def update(self, data: dict[str, object]) -> dict[str, object]:
        """Update a record; the API may echo nothing, so fall back to ``data``."""
        return await self._write("update", data)

    async def delete(self, record_id: str) -> None:
        """Delete a record by id."""
        await self.client.send(
            {"action": "delete", "type": self.entity_type, "object": {"id": record_id}}
        )

    async def search(self, query: str) -> list[dict[str, object]]:
        """Run a server-side search."""
        response = await self.client.send(
            {"action": "search", "type": self.entity_type, "query": query}
        )
        return self._records(response, "search")

    async def batch_create(
        self, items: list[dict[str, object]]
    ) -> list[dict[str, object]]:
        """Create several records in one request."""
        response = await self.client.send(
            {"action": "batch_create", "type": self.entity_type, "objects": items}
        )
        return self._records(response, "batch_create")

    async def batch_update(
        self, items: list[dict[str, object]]
    ) -> list[dict[str, object]]:
        """Update several records in one request."""
        response = await self.client.send(
            {"action": "batch_update", "type": self.entity_type, "objects": items}
        )
        return self._records(response, "batch_update")

    async def _write(self, action: str, data: dict[str, object]) -> dict[str, object]:
        response = await self.client.send(
            {"action": action, "type": self.entity_type, "object": data}
        )
        if not isinstance(response, list):
            raise ApiError(f"Failed to {action} {self.entity_type}")
        records = self._records(response, action)
        return records[0] if records else data

    def _records(self, response: object, action: str) -> list[dict[str, object]]:
        if response is None:
            return []
        if not isinstance(response, list) or not all(
            isinstance(row, dict) for row in response
        ):
            raise ApiError(f"Unexpected {self.entity_type} {action} response")
        return response
