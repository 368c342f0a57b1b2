"""List state holder that re-applies filter options on every read."""

from dataclasses import dataclass, field
from typing import Generic

from fitness_tracker.domain.filters import FilterOptions
from fitness_tracker.services.base import E, EntityService


@dataclass
class ListStore(Generic[E]):
    """The user's view over a service's cached list.

    The list itself lives in the service, so creates, updates and deletes made
    through the service show up on the next read.
    """

    service: EntityService[E]
    options: FilterOptions = field(default_factory=FilterOptions)
    date_field: str | None = None

    @property
    def items(self) -> list[E]:
        return self.service.items

    async def load(self, force_refresh: bool = False) -> list[E]:
        """Fetch the list unless one is already cached."""
        if self.service.items and not force_refresh:
            return list(self.service.items)
        return await self.service.get_list_from_server()

    def set_filter_options(self, options: FilterOptions) -> None:
        self.options = options

    def filtered(self) -> list[E]:
        """Items after search, sort and (when configured) the date range."""
        return self.options.apply(self.service.items, self.date_field)

    def page(self) -> list[E]:
        return self.options.page_list(self.filtered())
