"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from fitness_tracker.adapters.api_client import ApiClient, HttpxApiClient
from fitness_tracker.adapters.remote_records import RemoteRecordRepository
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.config import Settings
from fitness_tracker.domain.exercise import Exercise
from fitness_tracker.domain.filters import (
    ExerciseSortField,
    FilterOptions,
    FoodSortField,
    MealSortField,
    RecipeSortField,
    Sort,
    SortDirection,
    WeightSortField,
)
from fitness_tracker.domain.foods import Food, Recipe
from fitness_tracker.domain.meals import Meal
from fitness_tracker.domain.weight import Weight
from fitness_tracker.services.exercises import ExerciseService
from fitness_tracker.services.foods import FoodService, RecipeService
from fitness_tracker.services.meals import MealService
from fitness_tracker.services.store import ListStore
from fitness_tracker.services.weights import WeightService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    api_client: ApiClient
    food_service: FoodService
    recipe_service: RecipeService
    meal_service: MealService
    exercise_service: ExerciseService
    weight_service: WeightService
    food_store: ListStore[Food]
    recipe_store: ListStore[Recipe]
    meal_store: ListStore[Meal]
    exercise_store: ListStore[Exercise]
    weight_store: ListStore[Weight]
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    api_client = HttpxApiClient.create(
        resolved_settings.api_url,
        timeout_seconds=resolved_settings.request_timeout_seconds,
        retries=resolved_settings.request_retries,
        backoff_seconds=resolved_settings.retry_backoff_seconds,
    )
    return wire_container(resolved_settings, api_client, api_client.close)


def wire_container(
    settings: Settings,
    api_client: ApiClient,
    close_resources: Callable[[], Awaitable[None]],
) -> AppContainer:
    """Build services and stores on top of an API client."""
    page_size = settings.default_page_size
    food_service = FoodService(
        RemoteRecordRepository(api_client, "Foods"), page_size=page_size
    )
    recipe_service = RecipeService(
        RemoteRecordRepository(api_client, "Recipes"), page_size=page_size
    )
    meal_service = MealService(
        RemoteRecordRepository(api_client, "Meals"), page_size=page_size
    )
    exercise_service = ExerciseService(
        RemoteRecordRepository(api_client, "Exercises"), page_size=page_size
    )
    weight_service = WeightService(
        RemoteRecordRepository(api_client, "Weight"), page_size=page_size
    )

    return AppContainer(
        settings=settings,
        api_client=api_client,
        food_service=food_service,
        recipe_service=recipe_service,
        meal_service=meal_service,
        exercise_service=exercise_service,
        weight_service=weight_service,
        food_store=ListStore(
            food_service,
            _options(Sort(FoodSortField.NAME, SortDirection.ASC)),
        ),
        recipe_store=ListStore(
            recipe_service,
            _options(Sort(RecipeSortField.PROTEIN, SortDirection.DESC)),
        ),
        meal_store=ListStore(
            meal_service,
            _options(Sort(MealSortField.DATE, SortDirection.DESC)),
            date_field="date",
        ),
        exercise_store=ListStore(
            exercise_service,
            _options(Sort(ExerciseSortField.DATE, SortDirection.DESC)),
            date_field="date",
        ),
        weight_store=ListStore(
            weight_service,
            _options(Sort(WeightSortField.DATE, SortDirection.DESC)),
            date_field="date",
        ),
        close_resources=close_resources,
    )


def _options(sort: Sort) -> FilterOptions:
    return FilterOptions(preset="all", sort=sort)
