"""Portion scaling and meal nutrition totals."""

from collections.abc import Iterable

from aura_tracker.domain.errors import InvalidInputError
from aura_tracker.domain.nutrition import (
    NUTRIENT_FIELDS,
    FoodProfile,
    MealItem,
    MealTotals,
    Nutrients,
)
from aura_tracker.services.numeric import (
    require_non_negative,
    require_positive,
    round_half_up,
)

PORTION_DECIMALS = 1
OIL_KCAL_PER_ML = 9
OIL_FAT_G_PER_ML = 1


def portion_nutrients(per_100g: Nutrients, quantity_g: float) -> Nutrients:
    """Scale per-100g values linearly to a portion size."""
    require_positive("quantity_g", quantity_g)
    _require_valid_nutrients("per_100g", per_100g)
    multiplier = quantity_g / 100
    return Nutrients(
        **{
            name: round_half_up(getattr(per_100g, name) * multiplier, PORTION_DECIMALS)
            for name in NUTRIENT_FIELDS
        }
    )


def build_meal_item(food: FoodProfile, quantity_g: float) -> MealItem:
    """Create a meal item for a portion of a catalog food."""
    return MealItem(
        food_id=food.id,
        name=food.name,
        quantity_g=quantity_g,
        nutrients=portion_nutrients(food.per_100g, quantity_g),
    )


def sum_nutrients(values: Iterable[Nutrients]) -> Nutrients:
    """Elementwise sum in list order."""
    total = Nutrients()
    for value in values:
        total = total + value
    return total


def oil_nutrients(oil_ml: float) -> Nutrients:
    """Hidden calories and fat contributed by added oil."""
    return Nutrients(
        calories=oil_ml * OIL_KCAL_PER_ML,
        fats_g=oil_ml * OIL_FAT_G_PER_ML,
    )


def aggregate_meal_totals(
    items: list[MealItem],
    oil_ml: float = 0.0,
    *,
    has_gujju_sugar: bool = False,
    has_hidden_oil: bool = False,
) -> MealTotals:
    """Sum item nutrition and add the contribution of added oil."""
    if not items:
        raise InvalidInputError("A meal needs at least one item")
    require_non_negative("tadka_oil_ml", oil_ml)
    for index, item in enumerate(items):
        _require_valid_nutrients(f"items[{index}]", item.nutrients)

    total = sum_nutrients(item.nutrients for item in items)
    if oil_ml > 0:
        total = total + oil_nutrients(oil_ml)
    return MealTotals(
        nutrients=total,
        has_gujju_sugar=has_gujju_sugar,
        has_hidden_oil=has_hidden_oil,
        tadka_oil_ml=oil_ml,
    )


def _require_valid_nutrients(label: str, nutrients: Nutrients) -> None:
    for name in NUTRIENT_FIELDS:
        require_non_negative(f"{label}.{name}", getattr(nutrients, name))
