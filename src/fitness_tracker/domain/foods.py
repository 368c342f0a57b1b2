"""Food, recipe and recipe part models."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from uuid import uuid4

from fitness_tracker.domain.nutrients import (
    MacroBreakdown,
    NutrientProfile,
    ServingInfo,
    calories_from_macros,
    parse_number,
    sum_profiles,
)

RECIPE_SERVING = ServingInfo(size=1, unit="recipe")


class FoodType(str, Enum):
    """Whether a food's nutrients are stored or derived from parts."""

    SIMPLE = "simple"
    COMPOUND = "compound"


def new_part_id() -> str:
    """Return a fresh opaque id for a part created in memory."""
    return f"part_{uuid4().hex}"


class BaseFood(ABC):
    """Shared behaviour of anything that can be eaten in some amount."""

    type: FoodType

    def __init__(self, id: str, name: str = "", brand: str = "") -> None:  # noqa: A002
        self._id = id
        self.name = name
        self.brand = brand
        self._serving = ServingInfo()
        self._nutrients = NutrientProfile()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, name={self.name!r})"

    @property
    def id(self) -> str:
        """Opaque identifier assigned by the remote store."""
        return self._id

    @property
    def serving(self) -> ServingInfo:
        return self._serving

    @property
    def nutrients(self) -> NutrientProfile:
        return self._nutrients

    @property
    def calories(self) -> int:
        return self._nutrients.calories

    @property
    def macro_breakdown(self) -> MacroBreakdown:
        return self._nutrients.macro_breakdown

    def set_name(self, name: str) -> "BaseFood":
        self.name = name
        return self

    def set_brand(self, brand: str) -> "BaseFood":
        self.brand = brand
        return self

    def set_serving(self, size: float, unit: str) -> "BaseFood":
        self._serving = ServingInfo(size=float(size), unit=unit)
        return self

    def calculate_nutrients(
        self, amount: float, unit: str | None = None
    ) -> NutrientProfile:
        """Return nutrients for ``amount`` servings-worth of this food.

        The profile is scaled by ``amount / serving.size`` with every field
        rounded to one decimal. ``unit`` is accepted for symmetry with parts but
        no unit conversion takes place: callers must pass amounts in the
        serving's own unit. A zero serving size yields an empty profile.
        """
        if self._serving.size == 0:
            return NutrientProfile()
        return self._nutrients.scaled(amount / self._serving.size)

    @abstractmethod
    def to_payload(self) -> dict[str, object]:
        """Serialise to the API record shape."""


class Food(BaseFood):
    """A leaf food whose nutrient values are authoritative."""

    type = FoodType.SIMPLE

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "Food":
        """Build a food from an API record.

        Nutrients are usually flat on the record; records embedded in meal
        parts may carry them under a nested ``nutrients`` mapping instead.
        """
        values: dict[str, object] = dict(payload)
        nested = payload.get("nutrients")
        if isinstance(nested, Mapping):
            values.update(nested)
        serving = payload.get("serving")
        if isinstance(serving, Mapping):
            size, unit = serving.get("size"), serving.get("unit")
        else:
            size = payload.get("servingSize")
            unit = payload.get("servingSizeMeasurementType")
        food = cls(
            str(payload.get("id", "")),
            name=str(payload.get("name") or ""),
            brand=str(payload.get("brand") or ""),
        )
        food.set_serving(parse_number(size), str(unit or ""))
        food.set_nutrients(NutrientProfile.from_mapping(values))
        return food

    def to_payload(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "type": self.type.value,
            "servingSize": self._serving.size,
            "servingSizeMeasurementType": self._serving.unit,
            **self._nutrients.to_mapping(),
        }

    def set_nutrients(
        self, profile: NutrientProfile | None = None, **values: float
    ) -> "Food":
        """Replace the profile, or change individual nutrients by name."""
        if profile is not None:
            self._nutrients = profile
        if values:
            self._nutrients = self._nutrients.replace(**values)
        return self

    def set_protein(self, value: float) -> "Food":
        return self.set_nutrients(protein=value)

    def set_fat(self, value: float) -> "Food":
        return self.set_nutrients(fat=value)

    def set_carbs(self, value: float) -> "Food":
        return self.set_nutrients(carbs=value)

    def set_fiber(self, value: float) -> "Food":
        return self.set_nutrients(fiber=value)

    def set_sugar(self, value: float) -> "Food":
        return self.set_nutrients(sugar=value)

    def set_sodium(self, value: float) -> "Food":
        return self.set_nutrients(sodium=value)


@dataclass(frozen=True)
class Part:
    """A quantity of one food inside a recipe or meal."""

    id: str
    food: BaseFood
    amount: float
    unit: str

    @property
    def nutrients(self) -> NutrientProfile:
        return self.food.calculate_nutrients(self.amount, self.unit)

    @property
    def calories(self) -> int:
        nutrients = self.nutrients
        return calories_from_macros(nutrients.protein, nutrients.carbs, nutrients.fat)

    def with_amount(self, amount: float, unit: str | None = None) -> "Part":
        """Return a copy with a new amount, keeping the unit unless given."""
        return replace(self, amount=amount, unit=unit or self.unit)

    def to_payload(self) -> dict[str, object]:
        return {
            "id": self.id,
            "food": self.food.to_payload(),
            "amount": self.amount,
            "unit": self.unit,
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "Part":
        food_payload = payload["food"]
        if not isinstance(food_payload, Mapping):
            raise TypeError("Part payload 'food' must be a mapping")
        food = food_from_payload(food_payload)
        unit = payload.get("unit") or food.serving.unit
        return cls(
            id=str(payload.get("id") or new_part_id()),
            food=food,
            amount=parse_number(payload.get("amount")),
            unit=str(unit or ""),
        )


class Recipe(BaseFood):
    """A composite food whose nutrients are the sum of its parts.

    Every method that changes the parts recomputes the aggregate before
    returning, so ``nutrients`` never reflects an older set of parts.
    Parts hold references to their foods; if a food that is shared with this
    recipe is edited afterwards, call ``refresh`` to pick the change up.
    """

    type = FoodType.COMPOUND

    def __init__(
        self,
        id: str,  # noqa: A002
        name: str = "",
        brand: str = "",
        parts: Iterable[Part] = (),
    ) -> None:
        super().__init__(id, name=name, brand=brand)
        self._parts: list[Part] = list(parts)
        self._recompute()

    @property
    def parts(self) -> tuple[Part, ...]:
        return tuple(self._parts)

    def set_serving(self, size: float, unit: str) -> "Recipe":
        """Recipes are always served whole; the serving is left unchanged."""
        return self

    def add_part(self, food: BaseFood, amount: float, unit: str) -> Part:
        """Add a food to the recipe and return the new part."""
        part = Part(id=new_part_id(), food=food, amount=amount, unit=unit)
        self._parts.append(part)
        self._recompute()
        return part

    def remove_part(self, part_id: str) -> "Recipe":
        self._parts = [part for part in self._parts if part.id != part_id]
        self._recompute()
        return self

    def update_part(
        self, part_id: str, amount: float, unit: str | None = None
    ) -> "Recipe":
        """Change the amount of a part; unknown ids are ignored."""
        self._parts = [
            part.with_amount(amount, unit) if part.id == part_id else part
            for part in self._parts
        ]
        self._recompute()
        return self

    def set_parts(self, parts: Iterable[Part]) -> "Recipe":
        self._parts = list(parts)
        self._recompute()
        return self

    def refresh(self) -> "Recipe":
        """Recompute nutrients from the current state of every part."""
        self._recompute()
        return self

    def _recompute(self) -> None:
        self._nutrients = sum_profiles(part.nutrients for part in self._parts)
        self._serving = RECIPE_SERVING

    def to_payload(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "brand": self.brand,
            "type": self.type.value,
            "parts": [part.to_payload() for part in self._parts],
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "Recipe":
        """Build a recipe from an API record, accepting ``ingredients`` too."""
        raw_parts = payload.get("parts") or payload.get("ingredients") or []
        return cls(
            str(payload.get("id", "")),
            name=str(payload.get("name") or ""),
            brand=str(payload.get("brand") or ""),
            parts=[Part.from_payload(raw) for raw in raw_parts],  # type: ignore[union-attr]
        )


def food_from_payload(payload: Mapping[str, object]) -> BaseFood:
    """Build a ``Food`` or ``Recipe`` depending on the record's type tag."""
    if payload.get("type") == FoodType.COMPOUND.value:
        return Recipe.from_payload(payload)
    return Food.from_payload(payload)

