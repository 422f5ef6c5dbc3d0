"""Meal optimization score, coach tips and debuff alerts."""

from aura_tracker.domain.meals import DebuffAlert
from aura_tracker.domain.nutrition import MealTotals
from aura_tracker.domain.targets import ProfileTargets
from aura_tracker.services.numeric import require_positive, round_int

BASE_SCORE = 50
MAX_PROTEIN_POINTS = 25
MAX_FIBER_POINTS = 15
MEALS_PER_DAY = 3
SUGAR_SCORE_PENALTY = 15
OIL_SCORE_PENALTY = 10
LOW_PROTEIN_G = 15
LOW_ZINC_MG = 2
LOW_MAGNESIUM_MG = 50
LOW_FIBER_G = 5
ELITE_SCORE = 90
GREAT_SCORE = 75
PROTEIN_PRAISE_G = 30
HIGH_PROTEIN_DENSITY = 0.05
GOOD_PROTEIN_DENSITY = 0.03

TIP_SUGAR_TRAP = (
    "THE GUJJU TRAP! Sugar in a savory dish spikes insulin. "
    "Ask for 'no sugar' next time to protect your HP."
)
TIP_OIL_TAX = (
    "TADKA TAX! Hidden oil adds empty calories. "
    "Ask for less oil or cook at home to keep the gains."
)
TIP_LOW_PROTEIN = (
    "Low protein detected. Add 100g paneer (+18g protein) or 2 eggs "
    "(+12g protein) to reach the muscle-building threshold."
)
TIP_LOW_ZINC = (
    "Almost no zinc in this meal. A tablespoon of pumpkin seeds (about 2mg) "
    "or a handful of cashews will fix that."
)
TIP_LOW_MAGNESIUM = (
    "Magnesium deficit! Spinach, banana or dark chocolate help sleep and "
    "recovery."
)
TIP_LOW_FIBER = "Low fiber. Add a bowl of vegetables or dal for gut health."
TIP_ELITE_MEAL = "ELITE MEAL! Macros on point. This is Titan-level nutrition."
TIP_GREAT_MEAL = "Great meal choice! Every bite is building a stronger body."
TIP_PROTEIN_PRAISE = "Protein powerhouse! Your muscles are thanking you."
TIP_DEFAULT = "Solid meal logged. Keep the streak alive and level up!"

# kind -> (title, message)
DEBUFF_MESSAGES = {
    "sugar": ("INSULIN SPIKE", "Gujju Trap activated (-10 HP)"),
    "oil": ("TADKA TAX", "Hidden calories from added oil"),
    "trans_fat": ("TRANS FAT TOXIN", "Fried food detected (-20 HP)"),
    "low_protein": ("MUSCLE ATROPHY", "Under 15g protein, no gains"),
}


def compute_optimization_score(meal: MealTotals, targets: ProfileTargets) -> int:
    """Rate a meal from 0 to 100 against a third of the daily targets."""
    protein_target = require_positive("protein_target_g", targets.protein_target_g)
    fiber_target = require_positive("fiber_target_g", targets.fiber_target_g)
    nutrients = meal.nutrients
    score = BASE_SCORE

    protein_ratio = nutrients.protein_g / (protein_target / MEALS_PER_DAY)
    score += min(MAX_PROTEIN_POINTS, round_int(protein_ratio * MAX_PROTEIN_POINTS))

    fiber_ratio = nutrients.fiber_g / (fiber_target / MEALS_PER_DAY)
    score += min(MAX_FIBER_POINTS, round_int(fiber_ratio * MAX_FIBER_POINTS))

    if nutrients.calories > 0:
        protein_per_kcal = nutrients.protein_g / nutrients.calories
        if protein_per_kcal >= HIGH_PROTEIN_DENSITY:
            score += 10
        elif protein_per_kcal >= GOOD_PROTEIN_DENSITY:
            score += 5

    if meal.has_gujju_sugar:
        score -= SUGAR_SCORE_PENALTY
    if meal.has_hidden_oil:
        score -= OIL_SCORE_PENALTY

    return max(0, min(100, score))


def select_coach_tip(  # noqa: PLR0911
    meal: MealTotals,
    optimization_score: int,
    targets: ProfileTargets | None = None,
) -> str:
    """Pick the first matching tip from a fixed priority list.

    ``targets`` is accepted alongside the score but the cascade only uses
    absolute per-meal thresholds, so it does not change the tip.
    """
    nutrients = meal.nutrients
    if meal.has_gujju_sugar:
        return TIP_SUGAR_TRAP
    if meal.has_hidden_oil:
        return TIP_OIL_TAX
    if nutrients.protein_g < LOW_PROTEIN_G:
        return TIP_LOW_PROTEIN
    if nutrients.zinc_mg < LOW_ZINC_MG:
        return TIP_LOW_ZINC
    if nutrients.magnesium_mg < LOW_MAGNESIUM_MG:
        return TIP_LOW_MAGNESIUM
    if nutrients.fiber_g < LOW_FIBER_G:
        return TIP_LOW_FIBER
    if optimization_score >= ELITE_SCORE:
        return TIP_ELITE_MEAL
    if optimization_score >= GREAT_SCORE:
        return TIP_GREAT_MEAL
    if nutrients.protein_g >= PROTEIN_PRAISE_G:
        return TIP_PROTEIN_PRAISE
    return TIP_DEFAULT


def debuff_alert(kind: str) -> DebuffAlert:
    """Build the notification for a debuff kind."""
    title, message = DEBUFF_MESSAGES[kind]
    return DebuffAlert(kind=kind, title=title, message=message)


def debuff_alerts(meal: MealTotals) -> list[DebuffAlert]:
    """Notifications for the debuffs a meal triggered."""
    alerts = []
    if meal.has_gujju_sugar:
        alerts.append(debuff_alert("sugar"))
    if meal.has_hidden_oil:
        alerts.append(debuff_alert("oil"))
    if meal.nutrients.protein_g < LOW_PROTEIN_G:
        alerts.append(debuff_alert("low_protein"))
    return alerts
