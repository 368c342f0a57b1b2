"""Nutrient profile value objects and calorie arithmetic."""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields

# Python attribute name -> key used by the remote API.
NUTRIENT_KEYS: dict[str, str] = {
    "protein": "protein",
    "fat": "fat",
    "carbs": "carbs",
    "fiber": "fiber",
    "sugar": "sugar",
    "sodium": "sodium",
    "vitamin_a": "vitaminA",
    "vitamin_b1": "vitaminB1",
    "vitamin_b2": "vitaminB2",
    "vitamin_b3": "vitaminB3",
    "vitamin_b5": "vitaminB5",
    "vitamin_b6": "vitaminB6",
    "vitamin_b7": "vitaminB7",
    "vitamin_b9": "vitaminB9",
    "vitamin_b12": "vitaminB12",
    "vitamin_c": "vitaminC",
    "vitamin_d": "vitaminD",
    "vitamin_e": "vitaminE",
    "vitamin_k": "vitaminK",
    "calcium": "calcium",
    "iron": "iron",
    "magnesium": "magnesium",
    "potassium": "potassium",
    "zinc": "zinc",
}


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a calculator: halves go up, not to the nearest even digit."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def calories_from_macros(protein: float, carbs: float, fat: float) -> int:
    """Return whole calories from grams of protein, carbs and fat."""
    return int(round_half_up(protein * 4 + carbs * 4 + fat * 9))


@dataclass(frozen=True)
class ServingInfo:
    """Serving size that nutrient values are expressed against."""

    size: float = 0.0
    unit: str = ""


@dataclass(frozen=True)
class MacroBreakdown:
    """Percentage split of protein, fat and carbs."""

    protein: int = 0
    fat: int = 0
    carbs: int = 0

    @classmethod
    def from_grams(cls, protein: float, fat: float, carbs: float) -> "MacroBreakdown":
        """Build a breakdown from grams, returning zeros when all are zero."""
        total = protein + fat + carbs
        if total == 0:
            return cls()
        return cls(
            protein=int(round_half_up(protein / total * 100)),
            fat=int(round_half_up(fat / total * 100)),
            carbs=int(round_half_up(carbs / total * 100)),
        )


@dataclass(frozen=True)
class NutrientProfile:
    """Macro, vitamin and mineral quantities for one serving."""

    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0
    vitamin_a: float = 0.0
    vitamin_b1: float = 0.0
    vitamin_b2: float = 0.0
    vitamin_b3: float = 0.0
    vitamin_b5: float = 0.0
    vitamin_b6: float = 0.0
    vitamin_b7: float = 0.0
    vitamin_b9: float = 0.0
    vitamin_b12: float = 0.0
    vitamin_c: float = 0.0
    vitamin_d: float = 0.0
    vitamin_e: float = 0.0
    vitamin_k: float = 0.0
    calcium: float = 0.0
    iron: float = 0.0
    magnesium: float = 0.0
    potassium: float = 0.0
    zinc: float = 0.0

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "NutrientProfile":
        """Parse API-keyed values, treating missing or blank entries as zero."""
        parsed: dict[str, float] = {}
        for name, key in NUTRIENT_KEYS.items():
            raw = values.get(key, values.get(name))
            parsed[name] = parse_number(raw)
        return cls(**parsed)

    def to_mapping(self) -> dict[str, float]:
        """Return values keyed the way the API expects them."""
        return {key: getattr(self, name) for name, key in NUTRIENT_KEYS.items()}

    def replace(self, **changes: float) -> "NutrientProfile":
        """Return a copy with the given fields changed."""
        unknown = set(changes) - set(NUTRIENT_KEYS)
        if unknown:
            raise ValueError(f"Unknown nutrients: {', '.join(sorted(unknown))}")
        values = {field.name: getattr(self, field.name) for field in fields(self)}
        values.update({name: float(value) for name, value in changes.items()})
        return NutrientProfile(**values)

    def scaled(self, multiplier: float) -> "NutrientProfile":
        """Scale every field, rounding each to one decimal place."""
        return NutrientProfile(
            **{
                field.name: round_half_up(getattr(self, field.name) * multiplier, 1)
                for field in fields(self)
            }
        )

    def __add__(self, other: "NutrientProfile") -> "NutrientProfile":
        if not isinstance(other, NutrientProfile):
            return NotImplemented
        return NutrientProfile(
            **{
                field.name: getattr(self, field.name) + getattr(other, field.name)
                for field in fields(self)
            }
        )

    @property
    def calories(self) -> int:
        """Calories derived from protein, carbs and fat."""
        return calories_from_macros(self.protein, self.carbs, self.fat)

    @property
    def macro_breakdown(self) -> MacroBreakdown:
        """Percentage split of the three macronutrients."""
        return MacroBreakdown.from_grams(self.protein, self.fat, self.carbs)


def sum_profiles(profiles: Iterable[NutrientProfile]) -> NutrientProfile:
    """Field-wise sum of nutrient profiles."""
    total = NutrientProfile()
    for profile in profiles:
        total = total + profile
    return total


def parse_number(raw: object) -> float:
    """Coerce an API scalar to float; blanks, NaN and junk become zero."""
    if raw is None or raw == "":
        return 0.0
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value):
        return 0.0
    return value
