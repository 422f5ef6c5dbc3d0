"""Domain models for body metrics and daily targets."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from aura_tracker.domain.errors import MissingTargetError


class Goal(StrEnum):
    """Body composition goal chosen at onboarding."""

    RECOMP = "recomp"
    BULK = "bulk"
    CUT = "cut"


@dataclass(frozen=True)
class BodyMetrics:
    """Body measurements used to derive calorie targets."""

    weight_kg: float
    height_cm: float
    age: int


@dataclass(frozen=True)
class MacroTargets:
    """Daily calorie and macronutrient targets."""

    protein_target_g: int
    carbs_target_g: int
    fats_target_g: int
    calories_target: int


@dataclass(frozen=True)
class MicroTargets:
    """Daily micronutrient and fiber targets."""

    magnesium_target_mg: float
    zinc_target_mg: float
    fiber_target_g: float


@dataclass(frozen=True)
class ProfileTargets:
    """Full set of targets read from a profile."""

    protein_target_g: float
    carbs_target_g: float
    fats_target_g: float
    calories_target: float
    magnesium_target_mg: float
    zinc_target_mg: float
    fiber_target_g: float

    @classmethod
    def combine(cls, macros: MacroTargets, micros: MicroTargets) -> "ProfileTargets":
        """Build a target set from its macro and micro halves."""
        return cls(
            protein_target_g=macros.protein_target_g,
            carbs_target_g=macros.carbs_target_g,
            fats_target_g=macros.fats_target_g,
            calories_target=macros.calories_target,
            magnesium_target_mg=micros.magnesium_target_mg,
            zinc_target_mg=micros.zinc_target_mg,
            fiber_target_g=micros.fiber_target_g,
        )

    @classmethod
    def from_row(cls, row: Mapping[str, object]) -> "ProfileTargets":
        """Parse targets from a stored row, failing on missing fields."""
        values: dict[str, float] = {}
        for name in TARGET_FIELDS:
            raw = row.get(name)
            if raw is None:
                raise MissingTargetError(name)
            values[name] = float(raw)
        return cls(**values)

    def with_macros(self, macros: MacroTargets) -> "ProfileTargets":
        """Return a copy with the macro targets replaced."""
        return ProfileTargets.combine(
            macros,
            MicroTargets(
                magnesium_target_mg=self.magnesium_target_mg,
                zinc_target_mg=self.zinc_target_mg,
                fiber_target_g=self.fiber_target_g,
            ),
        )

    def as_dict(self) -> dict[str, float]:
        """Return targets keyed by their column names."""
        return {name: getattr(self, name) for name in TARGET_FIELDS}


TARGET_FIELDS = (
    "protein_target_g",
    "carbs_target_g",
    "fats_target_g",
    "calories_target",
    "magnesium_target_mg",
    "zinc_target_mg",
    "fiber_target_g",
)
