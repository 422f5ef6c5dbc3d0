"""Tests for target calculation."""

import math

import pytest

from aura_tracker.domain.errors import InvalidInputError, MissingTargetError
from aura_tracker.domain.targets import BodyMetrics, Goal, MacroTargets, ProfileTargets
from aura_tracker.services.targets import (
    MIN_CARBS_G,
    calculate_bmr,
    calculate_tdee,
    compute_macro_targets,
    default_targets,
    micro_targets,
)

METRICS = BodyMetrics(weight_kg=70, height_cm=175, age=22)


def test_recomp_targets_for_reference_profile() -> None:
    bmr = calculate_bmr(70, 175, 22)
    assert bmr == 1748.75
    assert calculate_tdee(bmr) == 2623.125

    targets = compute_macro_targets(METRICS, Goal.RECOMP)

    assert targets == MacroTargets(
        protein_target_g=140,
        carbs_target_g=374,
        fats_target_g=63,
        calories_target=2623,
    )


def test_goal_adjusts_calories_and_carbs() -> None:
    bulk = compute_macro_targets(METRICS, Goal.BULK)
    cut = compute_macro_targets(METRICS, "cut")

    assert bulk.calories_target == 2923
    assert bulk.carbs_target_g == 449
    assert cut.calories_target == 2223
    assert cut.carbs_target_g == 274
    assert bulk.protein_target_g == cut.protein_target_g == 140


def test_carbs_never_drop_below_minimum() -> None:
    metrics = BodyMetrics(weight_kg=150, height_cm=150, age=80)

    targets = compute_macro_targets(metrics, Goal.CUT)

    assert targets.carbs_target_g == MIN_CARBS_G


@pytest.mark.parametrize(
    "metrics",
    [
        BodyMetrics(weight_kg=0, height_cm=175, age=22),
        BodyMetrics(weight_kg=70, height_cm=-1, age=22),
        BodyMetrics(weight_kg=70, height_cm=175, age=0),
        BodyMetrics(weight_kg=math.nan, height_cm=175, age=22),
        BodyMetrics(weight_kg=math.inf, height_cm=175, age=22),
    ],
)
def test_invalid_metrics_rejected(metrics: BodyMetrics) -> None:
    with pytest.raises(InvalidInputError):
        compute_macro_targets(metrics, Goal.RECOMP)


def test_unknown_goal_rejected() -> None:
    with pytest.raises(InvalidInputError):
        compute_macro_targets(METRICS, "maintain")


def test_default_targets_include_micros() -> None:
    targets = default_targets(METRICS, Goal.RECOMP)
    micros = micro_targets()

    assert targets.protein_target_g == 140
    assert targets.magnesium_target_mg == micros.magnesium_target_mg == 400
    assert targets.zinc_target_mg == micros.zinc_target_mg == 15
    assert targets.fiber_target_g == micros.fiber_target_g == 40


def test_targets_from_row_requires_every_field() -> None:
    row = default_targets(METRICS, Goal.RECOMP).as_dict()
    assert ProfileTargets.from_row(row).calories_target == 2623

    row["zinc_target_mg"] = None
    with pytest.raises(MissingTargetError) as excinfo:
        ProfileTargets.from_row(row)
    assert excinfo.value.field == "zinc_target_mg"
