"""Daily calorie and macronutrient target calculation."""

from aura_tracker.domain.errors import InvalidInputError
from aura_tracker.domain.targets import (
    BodyMetrics,
    Goal,
    MacroTargets,
    MicroTargets,
    ProfileTargets,
)
from aura_tracker.services.numeric import require_positive, round_int

ACTIVITY_MULTIPLIER = 1.5
PROTEIN_G_PER_KG = 2.0
FAT_G_PER_KG = 0.9
MIN_CARBS_G = 100

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

_GOAL_ADJUSTMENT_KCAL = {
    Goal.RECOMP: 0,
    Goal.BULK: 300,
    Goal.CUT: -400,
}

MICRO_TARGETS = MicroTargets(
    magnesium_target_mg=400,
    zinc_target_mg=15,
    fiber_target_g=40,
)


def calculate_bmr(weight_kg: float, height_cm: float, age: float) -> float:
    """Mifflin-St Jeor basal metabolic rate (male coefficients)."""
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + 5


def calculate_tdee(
    bmr: float, activity_multiplier: float = ACTIVITY_MULTIPLIER
) -> float:
    """Total daily energy expenditure at a fixed activity level."""
    return bmr * activity_multiplier


def compute_macro_targets(metrics: BodyMetrics, goal: Goal | str) -> MacroTargets:
    """Derive daily calorie and macro targets from body metrics and goal."""
    weight = require_positive("weight_kg", metrics.weight_kg)
    height = require_positive("height_cm", metrics.height_cm)
    age = require_positive("age", metrics.age)
    resolved_goal = parse_goal(goal)

    tdee = calculate_tdee(calculate_bmr(weight, height, age))
    calories = tdee + _GOAL_ADJUSTMENT_KCAL[resolved_goal]

    protein_g = round_int(weight * PROTEIN_G_PER_KG)
    fats_g = round_int(weight * FAT_G_PER_KG)
    remaining = calories - protein_g * KCAL_PER_G_PROTEIN - fats_g * KCAL_PER_G_FAT
    carbs_g = round_int(remaining / KCAL_PER_G_CARBS)

    return MacroTargets(
        protein_target_g=protein_g,
        carbs_target_g=max(carbs_g, MIN_CARBS_G),
        fats_target_g=fats_g,
        calories_target=round_int(calories),
    )


def micro_targets() -> MicroTargets:
    """Fixed micronutrient targets shared by every user."""
    return MICRO_TARGETS


def default_targets(metrics: BodyMetrics, goal: Goal | str) -> ProfileTargets:
    """Full target set for a new profile."""
    return ProfileTargets.combine(
        compute_macro_targets(metrics, goal), micro_targets()
    )


def parse_goal(goal: Goal | str) -> Goal:
    """Return the goal enum or raise for unknown values."""
    try:
        return Goal(goal)
    except ValueError as exc:
        raise InvalidInputError(f"Unknown goal: {goal!r}") from exc
