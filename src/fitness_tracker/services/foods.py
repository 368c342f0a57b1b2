"""Services for foods and recipes."""

from collections.abc import Mapping
from dataclasses import dataclass

from fitness_tracker.domain.foods import Food, Recipe
from fitness_tracker.services.base import EntityService


@dataclass
class FoodService(EntityService[Food]):
    """Foods with a cached list."""

    def parse(self, payload: Mapping[str, object]) -> Food:
        return Food.from_payload(payload)


@dataclass
class RecipeService(EntityService[Recipe]):
    """Recipes with a cached list."""

    def parse(self, payload: Mapping[str, object]) -> Recipe:
        return Recipe.from_payload(payload)
