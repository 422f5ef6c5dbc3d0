"""Health point damage and recovery for logged meals."""

from aura_tracker.domain.game import HPResult, ScoreLine
from aura_tracker.domain.nutrition import MealTotals

HIDDEN_OIL_DAMAGE_ML = 15
OIL_OVERDOSE_ML = 25
PROTEIN_POWER_G = 25
FIBER_SHIELD_G = 10
OPTIMAL_PROTEIN_G = 30
OPTIMAL_FIBER_G = 8


def compute_hp(meal: MealTotals) -> HPResult:
    """Score a meal into HP damages and recoveries.

    The result is not clamped; the caller bounds the profile HP.
    Carbohydrates are part of the input but no rule reads them yet.
    """
    nutrients = meal.nutrients
    damages: list[ScoreLine] = []
    recoveries: list[ScoreLine] = []

    if meal.has_gujju_sugar:
        damages.append(ScoreLine("Insulin Spike (Sugar)", -10))
    if meal.has_hidden_oil and meal.tadka_oil_ml > HIDDEN_OIL_DAMAGE_ML:
        damages.append(ScoreLine("Hidden Oil Damage", -15))
    if meal.tadka_oil_ml > OIL_OVERDOSE_ML:
        damages.append(ScoreLine("Oil Overdose", -10))

    if nutrients.protein_g >= PROTEIN_POWER_G:
        recoveries.append(ScoreLine("Protein Power", 5))
    if nutrients.fiber_g >= FIBER_SHIELD_G:
        recoveries.append(ScoreLine("Fiber Shield", 5))
    if (
        nutrients.protein_g >= OPTIMAL_PROTEIN_G
        and nutrients.fiber_g >= OPTIMAL_FIBER_G
    ):
        recoveries.append(ScoreLine("Optimal Meal Bonus", 10))

    base_change = 0
    total_damage = sum(line.amount for line in damages)
    total_recovery = sum(line.amount for line in recoveries)
    return HPResult(
        base_change=base_change,
        damages=damages,
        recoveries=recoveries,
        total_change=base_change + total_damage + total_recovery,
    )
