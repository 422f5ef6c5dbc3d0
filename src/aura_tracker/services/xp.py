"""Experience point awards for logged meals."""

import math

from aura_tracker.domain.game import ScoreLine, XPResult
from aura_tracker.domain.nutrition import MealTotals
from aura_tracker.domain.targets import ProfileTargets
from aura_tracker.services.numeric import require_positive

HIGH_PROTEIN_G = 30
GOOD_PROTEIN_G = 25
FIBER_CHAMPION_G = 10
MICRO_TARGET_FRACTION = 3
HIDDEN_OIL_TAX_ML = 10
EXCESSIVE_TADKA_ML = 20

# (minimum streak days, bonus XP), highest first
_STREAK_TIERS = ((30, 100), (14, 50), (7, 25), (3, 10))


def compute_xp(meal: MealTotals, targets: ProfileTargets) -> XPResult:
    """Score a meal into base XP, bonuses and penalties."""
    magnesium_target = require_positive(
        "magnesium_target_mg", targets.magnesium_target_mg
    )
    zinc_target = require_positive("zinc_target_mg", targets.zinc_target_mg)
    nutrients = meal.nutrients
    bonuses: list[ScoreLine] = []
    penalties: list[ScoreLine] = []

    base_xp = math.floor(nutrients.protein_g / 10) * 10

    if nutrients.protein_g >= HIGH_PROTEIN_G:
        bonuses.append(ScoreLine("High Protein Meal (30g+)", 25))
    elif nutrients.protein_g >= GOOD_PROTEIN_G:
        bonuses.append(ScoreLine("Good Protein Meal (25g+)", 15))

    if nutrients.fiber_g >= FIBER_CHAMPION_G:
        bonuses.append(ScoreLine("Fiber Champion (10g+)", 20))

    if nutrients.magnesium_mg >= magnesium_target / MICRO_TARGET_FRACTION:
        bonuses.append(ScoreLine("Magnesium Boost", 50))
    if nutrients.zinc_mg >= zinc_target / MICRO_TARGET_FRACTION:
        bonuses.append(ScoreLine("Zinc Power", 50))

    if meal.has_gujju_sugar:
        penalties.append(ScoreLine("Gujju Trap (Sugar in Savory Dish)", -20))
    if meal.has_hidden_oil and meal.tadka_oil_ml > HIDDEN_OIL_TAX_ML:
        penalties.append(ScoreLine("Hidden Oil Tax", -30))
    if meal.tadka_oil_ml > EXCESSIVE_TADKA_ML:
        penalties.append(ScoreLine("Excessive Tadka", -15))

    total = base_xp + _sum_lines(bonuses) + _sum_lines(penalties)
    return XPResult(
        base_xp=base_xp,
        bonuses=bonuses,
        penalties=penalties,
        total_xp=max(0, total),
    )


def streak_bonus(streak_days: int) -> int:
    """Daily bonus XP for keeping a logging streak."""
    for min_days, bonus in _STREAK_TIERS:
        if streak_days >= min_days:
            return bonus
    return 0


def _sum_lines(lines: list[ScoreLine]) -> int:
    return sum(line.amount for line in lines)
