"""Single entry point that scores a meal for preview and commit."""

from aura_tracker.domain.meals import MealEvaluation
from aura_tracker.domain.nutrition import MealTotals
from aura_tracker.domain.targets import ProfileTargets
from aura_tracker.services.coaching import (
    compute_optimization_score,
    debuff_alerts,
    select_coach_tip,
)
from aura_tracker.services.hp import compute_hp
from aura_tracker.services.xp import compute_xp


def evaluate_meal(meal: MealTotals, targets: ProfileTargets) -> MealEvaluation:
    """Run every scoring rule against a meal's totals."""
    xp = compute_xp(meal, targets)
    hp = compute_hp(meal)
    score = compute_optimization_score(meal, targets)
    return MealEvaluation(
        totals=meal,
        xp=xp,
        hp=hp,
        optimization_score=score,
        coach_tip=select_coach_tip(meal, score, targets),
        alerts=debuff_alerts(meal),
    )
