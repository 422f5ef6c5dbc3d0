"""Meal logging service."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from aura_tracker.domain.errors import InvalidInputError, PartialUpdateError
from aura_tracker.domain.game import GameStats, StatsUpdate
from aura_tracker.domain.meals import (
    MealEvaluation,
    MealInput,
    MealLogOutcome,
    MealLogRecord,
    MealPreview,
    MealType,
)
from aura_tracker.domain.nutrition import FoodProfile, MealItem, MealTotals
from aura_tracker.services.aggregation import aggregate_meal_totals, build_meal_item
from aura_tracker.services.profiles import ProfileService
from aura_tracker.services.progression import apply_meal
from aura_tracker.services.scoring import evaluate_meal
from aura_tracker.services.stats import StatsService

_logger = logging.getLogger(__name__)

STATS_WRITE_ATTEMPTS = 3


class FoodRepository(Protocol):
    """Read access to the food catalog."""

    def get_food(self, food_id: UUID) -> FoodProfile | None:
        """Return a catalog food by id, if present."""


class MealLogRepository(Protocol):
    """Persistence interface for meal logs."""

    def create_meal_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        logged_at: datetime,
        meal_date: date,
        meal_type: MealType,
        items: list[MealItem],
        evaluation: MealEvaluation,
        streak_bonus_xp: int = 0,
    ) -> MealLogRecord:
        """Insert a meal log and return the stored record."""

    def update_streak_bonus(
        self, meal_id: UUID, streak_bonus_xp: int
    ) -> MealLogRecord:
        """Correct the streak bonus recorded on a stored meal log."""


@dataclass
class MealLogService:
    """Service that scores meals and persists them with profile updates."""

    food_repository: FoodRepository
    repository: MealLogRepository
    profile_service: ProfileService
    stats_service: StatsService
    timezone_name: str = "UTC"

    def build_meal(self, meal_input: MealInput) -> tuple[list[MealItem], MealTotals]:
        """Resolve catalog foods, scale portions and aggregate totals."""
        if not meal_input.items:
            raise InvalidInputError("A meal needs at least one item")
        items = []
        for entry in meal_input.items:
            food = self.food_repository.get_food(entry.food_id)
            if food is None:
                raise InvalidInputError(f"Unknown food: {entry.food_id}")
            items.append(build_meal_item(food, entry.quantity_g))
        totals = aggregate_meal_totals(
            items,
            meal_input.tadka_oil_ml,
            has_gujju_sugar=meal_input.has_gujju_sugar,
            has_hidden_oil=meal_input.has_hidden_oil,
        )
        return items, totals

    def preview_meal(self, user_id: UUID, meal_input: MealInput) -> MealPreview:
        """Score a meal and project the profile update without saving."""
        profile = self.profile_service.get_profile(user_id)
        items, totals = self.build_meal(meal_input)
        evaluation = evaluate_meal(totals, profile.targets)
        projected = apply_meal(
            profile.stats,
            evaluation.xp.total_xp,
            evaluation.hp.total_change,
            self.today(),
        )
        return MealPreview(items=items, evaluation=evaluation, projected=projected)

    def log_meal(self, user_id: UUID, meal_input: MealInput) -> MealLogOutcome:
        """Score a meal, store it, then update the profile and daily summary.

        The meal log records the streak bonus it earned, so daily summaries
        summed from meal logs match the XP added to the profile.
        """
        profile = self.profile_service.get_profile(user_id)
        items, totals = self.build_meal(meal_input)
        evaluation = evaluate_meal(totals, profile.targets)

        logged_at = self._now()
        meal_date = logged_at.date()
        update = apply_meal(
            profile.stats,
            evaluation.xp.total_xp,
            evaluation.hp.total_change,
            meal_date,
        )
        record = self.repository.create_meal_log(
            user_id=user_id,
            logged_at=logged_at,
            meal_date=meal_date,
            meal_type=meal_input.meal_type,
            items=items,
            evaluation=evaluation,
            streak_bonus_xp=update.streak_bonus_xp,
        )

        try:
            update, record = self._save_stats(user_id, profile.stats, update, record)
        except Exception as exc:
            _logger.exception(
                "Profile stats update failed after storing meal %s for %s",
                record.id,
                user_id,
            )
            raise PartialUpdateError(record.id, "profile") from exc

        _logger.info(
            "Meal logged: user=%s meal=%s xp=%s streak_bonus=%s hp=%s",
            user_id,
            record.id,
            update.xp_gained,
            update.streak_bonus_xp,
            update.hp_change,
        )
        if update.leveled_up:
            _logger.info(
                "Level up: user=%s level=%s rank=%s",
                user_id,
                update.stats.current_level,
                update.stats.rank,
            )

        try:
            summary = self.stats_service.refresh_daily_summary(
                user_id,
                meal_date,
                profile.targets.protein_target_g,
                hp_end_of_day=update.stats.current_hp,
            )
        except Exception:
            _logger.exception(
                "Daily summary refresh failed for %s on %s; retry the refresh",
                user_id,
                meal_date,
            )
            return MealLogOutcome(
                meal=record,
                evaluation=evaluation,
                update=update,
                daily_summary=None,
                summary_synced=False,
            )
        return MealLogOutcome(
            meal=record,
            evaluation=evaluation,
            update=update,
            daily_summary=summary,
            summary_synced=True,
        )

    def today(self) -> date:
        """Return the current local date used for meal and summary days."""
        return self._now().date()

    def _now(self) -> datetime:
        return datetime.now(tz=ZoneInfo(self.timezone_name))

    def _save_stats(
        self,
        user_id: UUID,
        previous: GameStats,
        update: StatsUpdate,
        record: MealLogRecord,
    ) -> tuple[StatsUpdate, MealLogRecord]:
        """Write stats only over the state they were computed from.

        A concurrent meal changes the stored XP or HP; the update is then
        reapplied to the fresh stats and the meal's streak bonus corrected.
        """
        for _ in range(STATS_WRITE_ATTEMPTS):
            if self.profile_service.save_stats(user_id, update.stats, previous):
                return update, record
            _logger.warning(
                "Profile stats changed while logging meal %s for %s; reapplying",
                record.id,
                user_id,
            )
            previous = self.profile_service.get_profile(user_id).stats
            update = apply_meal(
                previous, update.xp_gained, update.hp_change, record.meal_date
            )
            if update.streak_bonus_xp != record.streak_bonus_xp:
                record = self.repository.update_streak_bonus(
                    record.id, update.streak_bonus_xp
                )
        raise RuntimeError(
            f"Profile stats for {user_id} kept changing during meal {record.id}"
        )
