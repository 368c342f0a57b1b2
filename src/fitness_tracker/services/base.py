"""Shared CRUD service for entities kept in the remote store."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

from fitness_tracker.domain.filters import FilterOptions
from fitness_tracker.errors import ApiError

_logger = logging.getLogger(__name__)


class RecordRepository(Protocol):
    """Persistence interface for one entity type of the remote store."""

    entity_type: str

    async def list_records(
        self, start: int = 0, count: int = 25, filters: dict[str, object] | None = None
    ) -> list[dict[str, object]]:
        """Return a page of raw records."""

    async def get_by_id(self, record_id: str) -> dict[str, object]:
        """Return one raw record, raising ``ApiError`` when it doesn't exist."""

    async def create(self, data: dict[str, object]) -> dict[str, object]:
        """Create a record and return it."""

    async def update(self, data: dict[str, object]) -> dict[str, object]:
        """Update a record and return it."""

    async def delete(self, record_id: str) -> None:
        """Delete a record by id."""

    async def search(self, query: str) -> list[dict[str, object]]:
        """Search records on the server."""


class Entity(Protocol):
    """What services need from a domain entity."""

    @property
    def id(self) -> str: ...

    def to_payload(self) -> dict[str, object]: ...


E = TypeVar("E", bound=Entity)


@dataclass
class EntityService(ABC, Generic[E]):
    """Caches the last fetched list and keeps it in step with writes.

    Subclasses provide ``parse`` to turn raw records into entities.
    """

    repository: RecordRepository
    page_size: int = 25
    items: list[E] = field(default_factory=list)

    @abstractmethod
    def parse(self, payload: Mapping[str, object]) -> E:
        """Build an entity from a raw record."""

    async def get_list_from_server(
        self, start: int = 0, count: int | None = None
    ) -> list[E]:
        """Fetch a page of entities and make it the cached list."""
        try:
            records = await self.repository.list_records(
                start, count if count is not None else self.page_size
            )
        except ApiError as exc:
            _logger.warning(
                "Failed to fetch %s list: %s", self.repository.entity_type, exc
            )
            raise
        self.items = [self.parse(record) for record in records]
        return list(self.items)

    def get_cached(self, entity_id: str) -> E | None:
        return next((item for item in self.items if item.id == entity_id), None)

    async def get_by_id(self, entity_id: str) -> E:
        """Return an entity from the cached list, or fetch it."""
        cached = self.get_cached(entity_id)
        if cached is not None:
            return cached
        return await self.get_from_server_by_id(entity_id)

    async def get_from_server_by_id(self, entity_id: str) -> E:
        try:
            record = await self.repository.get_by_id(entity_id)
        except ApiError as exc:
            _logger.warning(
                "Failed to fetch %s %s: %s", self.repository.entity_type, entity_id, exc
            )
            raise
        return self.parse(record)

    async def create(self, entity: E) -> E:
        """Create ``entity`` remotely and add the result to the cache."""
        try:
            record = await self.repository.create(entity.to_payload())
        except ApiError as exc:
            _logger.warning("Failed to create %s: %s", self.repository.entity_type, exc)
            raise
        created = self.parse(record)
        if self.get_cached(created.id) is None:
            self.items.append(created)
        return created

    async def update(self, entity: E) -> E:
        """Update ``entity`` remotely and replace the cached copy."""
        try:
            record = await self.repository.update(entity.to_payload())
        except ApiError as exc:
            _logger.warning(
                "Failed to update %s %s: %s", self.repository.entity_type, entity.id, exc
            )
            raise
        updated = self.parse(record)
        self.items = [updated if item.id == updated.id else item for item in self.items]
        return updated

    async def delete(self, entity: E) -> None:
        """Delete ``entity`` remotely and drop it from the cache."""
        try:
            await self.repository.delete(entity.id)
        except ApiError as exc:
            _logger.warning(
                "Failed to delete %s %s: %s", self.repository.entity_type, entity.id, exc
            )
            raise
        self.items = [item for item in self.items if item.id != entity.id]

    async def search(self, query: str, server_search: bool = False) -> list[E]:
        """Search on the server if asked, falling back to the cached list."""
        if server_search:
            try:
                records = await self.repository.search(query)
            except ApiError as exc:
                _logger.warning(
                    "Server search for %s failed, searching locally: %s",
                    self.repository.entity_type,
                    exc,
                )
            else:
                return [self.parse(record) for record in records]
        return self.search_local(query)

    def search_local(self, query: str) -> list[E]:
        return FilterOptions(search=query).search_list(list(self.items))
