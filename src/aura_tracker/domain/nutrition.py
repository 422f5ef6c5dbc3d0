"""Nutrition domain models."""

from dataclasses import dataclass, fields
from uuid import UUID


@dataclass(frozen=True)
class Nutrients:
    """Nutrition values for a portion, a meal or a day."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fats_g: float = 0.0
    fiber_g: float = 0.0
    magnesium_mg: float = 0.0
    zinc_mg: float = 0.0

    def __add__(self, other: "Nutrients") -> "Nutrients":
        if not isinstance(other, Nutrients):
            return NotImplemented
        return Nutrients(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fats_g=self.fats_g + other.fats_g,
            fiber_g=self.fiber_g + other.fiber_g,
            magnesium_mg=self.magnesium_mg + other.magnesium_mg,
            zinc_mg=self.zinc_mg + other.zinc_mg,
        )

    def as_dict(self) -> dict[str, float]:
        """Return values keyed by field name."""
        return {field.name: getattr(self, field.name) for field in fields(self)}


NUTRIENT_FIELDS = tuple(field.name for field in fields(Nutrients))


@dataclass(frozen=True)
class FoodProfile:
    """Catalog food with nutrition per 100g."""

    id: UUID
    name: str
    category: str | None
    per_100g: Nutrients
    is_high_protein: bool = False
    typical_oil_ml: float | None = None
    serving_size_g: float | None = None


@dataclass(frozen=True)
class MealItem:
    """A food portion inside a meal."""

    food_id: UUID | None
    name: str
    quantity_g: float
    nutrients: Nutrients


@dataclass(frozen=True)
class MealTotals:
    """Summed nutrition for a meal plus its debuff flags."""

    nutrients: Nutrients
    has_gujju_sugar: bool = False
    has_hidden_oil: bool = False
    tadka_oil_ml: float = 0.0
