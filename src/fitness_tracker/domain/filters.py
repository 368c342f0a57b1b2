"""Search, sort, date-range and paging options for entity lists.

Every operation here is a pure transformation: it returns a new list, or the
input list itself when the corresponding option is inactive.
"""

import math
import re
import unicodedata
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum, IntEnum
from functools import cmp_to_key
from operator import attrgetter
from typing import TypeVar

from fitness_tracker.domain.dates import to_naive_utc

T = TypeVar("T")


class SortDirection(IntEnum):
    NONE = 0
    ASC = 1
    DESC = 2


class SortField(Enum):
    """Base for the closed set of sortable fields of one entity type.

    Each member's value is the attribute path it sorts on; the accessor is
    bound when the enum class is created.
    """

    def __init__(self, path: str) -> None:
        self.accessor: Callable[[object], object] = attrgetter(path)

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

    def value_of(self, item: object) -> object:
        return self.accessor(item)


class FoodSortField(SortField):
    NAME = "name"
    BRAND = "brand"
    CALORIES = "calories"
    PROTEIN = "nutrients.protein"
    FAT = "nutrients.fat"
    CARBS = "nutrients.carbs"
    FIBER = "nutrients.fiber"
    SUGAR = "nutrients.sugar"
    SODIUM = "nutrients.sodium"
    SERVING_SIZE = "serving.size"


class RecipeSortField(SortField):
    NAME = "name"
    CALORIES = "calories"
    PROTEIN = "nutrients.protein"
    FAT = "nutrients.fat"
    CARBS = "nutrients.carbs"


class MealSortField(SortField):
    DATE = "date"
    NAME = "name"
    CALORIES = "total_calories"
    PROTEIN = "totals.protein"
    FAT = "totals.fat"
    CARBS = "totals.carbs"


class ExerciseSortField(SortField):
    DATE = "date"
    NAME = "name"
    WEIGHT = "weight"
    SETS = "sets"
    REPS = "reps"
    VOLUME = "total_weight_moved"


class WeightSortField(SortField):
    DATE = "date"
    POUNDS = "pounds"


@dataclass
class Sort:
    """Active sort field and direction."""

    field: SortField | None = None
    direction: SortDirection = SortDirection.DESC

    def set_direction(self, direction: SortDirection) -> "Sort":
        self.direction = direction
        return self

    def toggle_direction(self) -> "Sort":
        if self.direction is SortDirection.ASC:
            return self.set_direction(SortDirection.DESC)
        return self.set_direction(SortDirection.ASC)

    def direction_label(self) -> str:
        return "asc" if self.direction is SortDirection.ASC else "desc"


@dataclass
class DateRange:
    """Inclusive window of dates; an unset bound matches nothing."""

    start: datetime | None = None
    end: datetime | None = None
    active: bool = True

    @classmethod
    def spanning_days(cls, start: datetime, days: int) -> "DateRange":
        """Window from ``start`` to ``days`` days later."""
        return cls(start=start, end=start + timedelta(days=days))

    def days_between(self) -> int:
        if self.start is None or self.end is None:
            return 0
        span = to_naive_utc(self.end) - to_naive_utc(self.start)
        return math.floor(span.total_seconds() / 86400)

    def contains(self, value: object) -> bool:
        if not isinstance(value, datetime):
            raise TypeError(f"Date range filter needs a datetime, got {value!r}")
        if self.start is None or self.end is None:
            return False
        start, end = to_naive_utc(self.start), to_naive_utc(self.end)
        return start <= to_naive_utc(value) <= end


@dataclass
class Paging:
    offset: int = 0
    count: int = 25


@dataclass
class FilterOptions:
    """User-selected view over a list: search, sort, date window and page."""

    preset: str = ""
    search: str = ""
    sort: Sort = field(default_factory=Sort)
    range: DateRange | None = None
    page: Paging = field(default_factory=Paging)

    def set_preset(self, preset: str) -> "FilterOptions":
        self.preset = preset
        return self

    def set_search(self, term: str) -> "FilterOptions":
        self.search = term
        return self

    def set_sort(self, sort: Sort) -> "FilterOptions":
        self.sort = sort
        return self

    def set_range(self, date_range: DateRange | None) -> "FilterOptions":
        self.range = date_range
        return self

    def search_terms(self) -> list[str]:
        """Comma separated search terms, trimmed and lowercased."""
        terms = (term.strip().lower() for term in self.search.split(","))
        return [term for term in terms if term]

    def search_list(self, items: list[T]) -> list[T]:
        """Keep items whose name and brand contain every search term.

        Items exposing a ``search_text`` string are matched against it instead.
        """
        if not self.search:
            return items
        terms = self.search_terms()
        if not terms:
            return items
        return [
            item
            for item in items
            if all(term in _searchable_text(item) for term in terms)
        ]

    def sort_list(self, items: list[T]) -> list[T]:
        """Return a sorted copy; ``None`` values always go last.

        Without a sort field, or with direction ``NONE``, the input is returned
        unchanged. Ties keep their input order.
        """
        sort = self.sort
        if sort is None or sort.field is None:
            return items
        if sort.direction is SortDirection.NONE:
            return items
        sort_field = sort.field
        sign = 1 if sort.direction is SortDirection.ASC else -1

        def compare(a: T, b: T) -> float:
            a_value = sort_field.value_of(a)
            b_value = sort_field.value_of(b)
            if a_value is None and b_value is None:
                return 0
            if a_value is None:
                return 1
            if b_value is None:
                return -1
            return sign * _compare_values(a_value, b_value)

        return sorted(items, key=cmp_to_key(compare))

    def filter_date_range(self, items: list[T], field_name: str) -> list[T]:
        """Keep items whose ``field_name`` datetime lies inside the range.

        Raises ``AttributeError`` or ``TypeError`` when the field is missing or
        is not a datetime.
        """
        date_range = self.range
        if date_range is None or not date_range.active:
            return items
        return [item for item in items if date_range.contains(getattr(item, field_name))]

    def page_list(self, items: list[T]) -> list[T]:
        start = max(self.page.offset, 0)
        return items[start : start + max(self.page.count, 0)]

    def apply(self, items: list[T], date_field: str | None = None) -> list[T]:
        """Search, then sort, then restrict to the date range if a field is given."""
        result = self.sort_list(self.search_list(items))
        if date_field is not None:
            result = self.filter_date_range(result, date_field)
        return result

    def display_preset(self) -> str:
        return to_title_case(self.preset)

    def display_active_sort(self) -> str:
        if self.sort is None or self.sort.field is None:
            return ""
        return self.sort.field.label

    def display_search_term(self) -> str:
        return to_title_case(self.search)

    def display_date(self, value: datetime) -> str:
        if self.range is None:
            return "Invalid Start Date"
        return value.date().isoformat()


def to_title_case(text: str) -> str:
    return re.sub(r"\w\S*", lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)


def _searchable_text(item: object) -> str:
    text = getattr(item, "search_text", None)
    if not isinstance(text, str):
        name = getattr(item, "name", "") or ""
        brand = getattr(item, "brand", "") or ""
        text = f"{name} {brand}"
    return text.lower()


def _compare_values(a: object, b: object) -> float:
    if isinstance(a, str) and isinstance(b, str):
        a_key, b_key = _collation_key(a), _collation_key(b)
        return (a_key > b_key) - (a_key < b_key)
    if isinstance(a, datetime) and isinstance(b, datetime):
        return (to_naive_utc(a) - to_naive_utc(b)).total_seconds()
    if isinstance(a, int | float) and isinstance(b, int | float):
        return a - b
    # Not a total order; only numbers, strings and datetimes sort reliably.
    return 1 if a > b else -1  # type: ignore[operator]


def _collation_key(text: str) -> tuple[str, str]:
    """Order by letters with accents stripped, then by the accented form."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), text.lower()
