"""Tests for list search, sort, date range and paging."""

from dataclasses import dataclass
from datetime import datetime, timedelta

import pytest

from fitness_tracker.domain.filters import (
    DateRange,
    FilterOptions,
    FoodSortField,
    MealSortField,
    Paging,
    Sort,
    SortDirection,
    WeightSortField,
    to_title_case,
)
from fitness_tracker.domain.meals import Meal
from fitness_tracker.domain.weight import Weight
from tests.conftest import make_food


@dataclass
class Item:
    name: str
    brand: str = ""


def _weights(*pounds: float | None) -> list[Weight]:
    start = datetime(2024, 1, 1)
    return [
        Weight(f"w-{index}", start + timedelta(days=index), value)  # type: ignore[arg-type]
        for index, value in enumerate(pounds)
    ]


def test_search_matches_substring() -> None:
    items = [Item("Chicken Breast"), Item("Beef Jerky")]

    result = FilterOptions(search="chick").search_list(items)

    assert [item.name for item in result] == ["Chicken Breast"]


def test_empty_search_returns_same_list() -> None:
    items = [Item("a"), Item("b")]

    assert FilterOptions().search_list(items) is items
    assert FilterOptions(search=" , ,").search_list(items) is items


def test_search_requires_every_term_across_name_and_brand() -> None:
    items = [
        Item("Greek Yogurt", "Fage"),
        Item("Greek Salad", "Deli"),
        Item("Yogurt", "Fage"),
    ]

    result = FilterOptions(search="greek, FAGE").search_list(items)

    assert result == [items[0]]


def test_search_result_is_ordered_subset() -> None:
    items = [Item(name) for name in ["ab", "b", "abc", "c", "bca"]]

    result = FilterOptions(search="b").search_list(items)

    assert result == [items[0], items[1], items[2], items[4]]
    assert all("b" in item.name for item in result)


def test_sort_numbers_both_directions() -> None:
    items = _weights(30, 10, 20)
    options = FilterOptions(sort=Sort(WeightSortField.POUNDS, SortDirection.ASC))

    ascending = options.sort_list(items)
    options.sort.set_direction(SortDirection.DESC)
    descending = options.sort_list(items)

    assert [item.pounds for item in ascending] == [10, 20, 30]
    assert [item.pounds for item in descending] == [30, 20, 10]
    assert [item.pounds for item in items] == [30, 10, 20]


def test_sort_is_idempotent_and_reversible() -> None:
    items = _weights(5, 3, 9, 1, 7)
    options = FilterOptions(sort=Sort(WeightSortField.POUNDS, SortDirection.ASC))

    once = options.sort_list(items)
    twice = options.sort_list(once)
    options.sort.toggle_direction()
    reversed_order = options.sort_list(items)

    assert twice == once
    assert reversed_order == list(reversed(once))


def test_sort_puts_none_last_in_both_directions() -> None:
    items = _weights(None, 2, 1)
    options = FilterOptions(sort=Sort(WeightSortField.POUNDS, SortDirection.ASC))

    assert [item.pounds for item in options.sort_list(items)] == [1, 2, None]
    options.sort.set_direction(SortDirection.DESC)
    assert [item.pounds for item in options.sort_list(items)] == [2, 1, None]


def test_sort_strings_ignore_case() -> None:
    foods = [make_food("1", "banana"), make_food("2", "Apple"), make_food("3", "cherry")]
    options = FilterOptions(sort=Sort(FoodSortField.NAME, SortDirection.ASC))

    assert [food.name for food in options.sort_list(foods)] == [
        "Apple",
        "banana",
        "cherry",
    ]


def test_sort_nested_nutrient_field() -> None:
    foods = [
        make_food("1", "a", protein=5),
        make_food("2", "b", protein=20),
        make_food("3", "c", protein=10),
    ]
    options = FilterOptions(sort=Sort(FoodSortField.PROTEIN, SortDirection.DESC))

    assert [food.id for food in options.sort_list(foods)] == ["2", "3", "1"]


def test_sort_dates_and_keeps_ties_stable() -> None:
    items = _weights(1, 1, 1)
    items[2].date = items[0].date
    options = FilterOptions(sort=Sort(WeightSortField.DATE, SortDirection.ASC))

    assert [item.id for item in options.sort_list(items)] == ["w-0", "w-2", "w-1"]


def test_sort_without_field_or_direction_is_noop() -> None:
    items = _weights(3, 1)

    assert FilterOptions().sort_list(items) is items
    none_direction = Sort(WeightSortField.POUNDS, SortDirection.NONE)
    assert FilterOptions(sort=none_direction).sort_list(items) is items


def test_toggle_direction_cycles() -> None:
    sort = Sort(WeightSortField.DATE, SortDirection.NONE)

    assert sort.toggle_direction().direction is SortDirection.ASC
    assert sort.toggle_direction().direction is SortDirection.DESC
    assert sort.direction_label() == "desc"


def test_filter_date_range_is_inclusive() -> None:
    items = _weights(1, 2, 3, 4)
    options = FilterOptions(
        range=DateRange(start=items[1].date, end=items[2].date)
    )

    result = options.filter_date_range(items, "date")

    assert [item.id for item in result] == ["w-1", "w-2"]


def test_inactive_or_missing_range_is_noop() -> None:
    items = _weights(1, 2)

    assert FilterOptions().filter_date_range(items, "date") is items
    inactive = DateRange(datetime(2030, 1, 1), datetime(2030, 1, 2), active=False)
    assert FilterOptions(range=inactive).filter_date_range(items, "date") is items


def test_unset_bound_matches_nothing() -> None:
    items = _weights(1, 2)
    options = FilterOptions(range=DateRange(start=datetime(2000, 1, 1)))

    assert options.filter_date_range(items, "date") == []


def test_date_range_on_non_date_field_raises() -> None:
    items = _weights(1)
    options = FilterOptions(range=DateRange(datetime(2000, 1, 1), datetime(2030, 1, 1)))

    with pytest.raises(TypeError):
        options.filter_date_range(items, "pounds")
    with pytest.raises(AttributeError):
        options.filter_date_range(items, "missing")


def test_date_range_helpers() -> None:
    start = datetime(2024, 1, 1)
    window = DateRange.spanning_days(start, 7)

    assert window.end == datetime(2024, 1, 8)
    assert window.days_between() == 7


def test_apply_composes_search_sort_and_range() -> None:
    items = _weights(30, 10, 20, 40)
    for item, name in zip(items, ["scale", "scale", "gym", "scale"], strict=True):
        item.name = name  # type: ignore[attr-defined]
    options = FilterOptions(
        search="scale",
        sort=Sort(WeightSortField.POUNDS, SortDirection.ASC),
        range=DateRange(items[0].date, items[2].date),
    )

    result = options.apply(items, date_field="date")

    assert [item.pounds for item in result] == [10, 30]


def test_page_list_slices() -> None:
    items = list(range(10))
    options = FilterOptions(page=Paging(offset=4, count=3))

    assert options.page_list(items) == [4, 5, 6]


def test_display_helpers() -> None:
    options = FilterOptions(
        preset="all foods",
        search="greek yogurt",
        sort=Sort(FoodSortField.SERVING_SIZE),
    )

    assert options.display_preset() == "All Foods"
    assert options.display_search_term() == "Greek Yogurt"
    assert options.display_active_sort() == "Serving Size"
    assert options.display_date(datetime(2024, 5, 1, 13)) == "Invalid Start Date"
    options.set_range(DateRange(datetime(2024, 5, 1), datetime(2024, 5, 2)))
    assert options.display_date(datetime(2024, 5, 1, 13)) == "2024-05-01"
    assert to_title_case("hELLO wORLD") == "Hello World"


def test_sort_strings_collate_accented_letters_with_base_letter() -> None:
    names = ["fig", "éclair", "apple", "Zucchini"]
    foods = [make_food(f"f-{name}", name) for name in names]
    options = FilterOptions(sort=Sort(FoodSortField.NAME, SortDirection.ASC))

    assert [food.name for food in options.sort_list(foods)] == [
        "apple",
        "éclair",
        "fig",
        "Zucchini",
    ]


def _api_meals() -> list[Meal]:
    return [
        Meal.from_payload({"id": "m-utc", "date": "2024-03-10T12:00:00Z"}),
        Meal.from_payload({"id": "m-local", "date": "2024-03-09 18:00:00"}),
        Meal.from_payload({"id": "m-offset", "date": "2024-03-10T09:00:00+02:00"}),
    ]


def test_filter_date_range_over_mixed_api_date_formats() -> None:
    march = DateRange(datetime(2024, 3, 10), datetime(2024, 3, 31))
    options = FilterOptions(range=march)

    result = options.filter_date_range(_api_meals(), "date")

    assert [meal.id for meal in result] == ["m-utc", "m-offset"]


def test_sort_dates_over_mixed_api_date_formats() -> None:
    options = FilterOptions(sort=Sort(MealSortField.DATE, SortDirection.ASC))

    result = options.sort_list(_api_meals())

    assert [meal.id for meal in result] == ["m-local", "m-offset", "m-utc"]


def test_date_range_accepts_aware_bounds() -> None:
    window = DateRange(
        datetime.fromisoformat("2024-03-10T00:00:00+00:00"),
        datetime.fromisoformat("2024-03-11T00:00:00+00:00"),
    )

    assert window.contains(datetime(2024, 3, 10, 12))
    assert window.days_between() == 1
