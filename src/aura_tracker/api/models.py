"""Pydantic request models for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel, Field

from aura_tracker.domain.meals import MealInput, MealItemInput, MealType
from aura_tracker.domain.targets import BodyMetrics, Goal, MacroTargets


class BodyMetricsIn(BaseModel):
    """Body measurements payload."""

    weight_kg: float = Field(gt=0, allow_inf_nan=False)
    height_cm: float = Field(gt=0, allow_inf_nan=False)
    age: int = Field(gt=0)

    def to_domain(self) -> BodyMetrics:
        return BodyMetrics(
            weight_kg=self.weight_kg, height_cm=self.height_cm, age=self.age
        )


class TargetsPreviewRequest(BodyMetricsIn):
    """Metrics and goal to compute targets for."""

    goal: Goal = Goal.RECOMP


class ProfileCreateRequest(BodyMetricsIn):
    """Onboarding payload."""

    display_name: str | None = None
    goal: Goal = Goal.RECOMP


class RecalculateTargetsRequest(BaseModel):
    """Optional overrides used when recalculating targets."""

    weight_kg: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    goal: Goal | None = None


class MacroTargetsIn(BaseModel):
    """User-edited macro targets."""

    protein_target_g: int = Field(gt=0)
    carbs_target_g: int = Field(gt=0)
    fats_target_g: int = Field(gt=0)
    calories_target: int = Field(gt=0)

    def to_domain(self) -> MacroTargets:
        return MacroTargets(
            protein_target_g=self.protein_target_g,
            carbs_target_g=self.carbs_target_g,
            fats_target_g=self.fats_target_g,
            calories_target=self.calories_target,
        )


class MealItemIn(BaseModel):
    """Portion of a catalog food."""

    food_id: UUID
    quantity_g: float = Field(gt=0, allow_inf_nan=False)


class MealIn(BaseModel):
    """Meal submission payload."""

    meal_type: MealType
    items: list[MealItemIn] = Field(min_length=1)
    has_hidden_oil: bool = False
    has_gujju_sugar: bool = False
    tadka_oil_ml: float = Field(default=0.0, ge=0, allow_inf_nan=False)

    def to_domain(self) -> MealInput:
        return MealInput(
            meal_type=self.meal_type,
            items=[
                MealItemInput(food_id=item.food_id, quantity_g=item.quantity_g)
                for item in self.items
            ],
            has_hidden_oil=self.has_hidden_oil,
            has_gujju_sugar=self.has_gujju_sugar,
            tadka_oil_ml=self.tadka_oil_ml,
        )
