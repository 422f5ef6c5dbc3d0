"""Domain models for meal logging."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from aura_tracker.domain.game import HPResult, StatsUpdate, XPResult
from aura_tracker.domain.nutrition import MealItem, MealTotals, Nutrients


class MealType(StrEnum):
    """Slot of the day a meal belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class MealItemInput:
    """Requested portion of a catalog food."""

    food_id: UUID
    quantity_g: float


@dataclass(frozen=True)
class MealInput:
    """Meal as submitted by the caller."""

    meal_type: MealType
    items: list[MealItemInput]
    has_hidden_oil: bool = False
    has_gujju_sugar: bool = False
    tadka_oil_ml: float = 0.0


@dataclass(frozen=True)
class DebuffAlert:
    """Short notification for a triggered debuff."""

    kind: str
    title: str
    message: str


@dataclass(frozen=True)
class MealEvaluation:
    """Everything the engine derives from one meal."""

    totals: MealTotals
    xp: XPResult
    hp: HPResult
    optimization_score: int
    coach_tip: str
    alerts: list[DebuffAlert] = field(default_factory=list)


@dataclass(frozen=True)
class MealPreview:
    """Evaluation of an unsaved meal with projected stats."""

    items: list[MealItem]
    evaluation: MealEvaluation
    projected: StatsUpdate


@dataclass(frozen=True)
class MealLogRecord:
    """Stored meal log row."""

    id: UUID
    user_id: UUID
    meal_date: date
    logged_at: datetime
    meal_type: MealType
    items: list[MealItem]
    totals: MealTotals
    xp_earned: int
    hp_impact: int
    coach_tip: str
    optimization_score: int
    streak_bonus_xp: int = 0

    @property
    def awarded_xp(self) -> int:
        """XP this meal added to the profile, streak bonus included."""
        return self.xp_earned + self.streak_bonus_xp


@dataclass(frozen=True)
class DailySummary:
    """Totals for one user and day derived from meal logs."""

    user_id: UUID
    summary_date: date
    nutrients: Nutrients
    meal_count: int
    xp_gained_today: int
    hp_end_of_day: int | None
    protein_goal_hit: bool


@dataclass(frozen=True)
class MealLogOutcome:
    """Result of committing a meal."""

    meal: MealLogRecord
    evaluation: MealEvaluation
    update: StatsUpdate
    daily_summary: DailySummary | None
    summary_synced: bool
