"""Daily summaries derived from meal logs."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from aura_tracker.domain.meals import DailySummary, MealLogRecord
from aura_tracker.services.aggregation import sum_nutrients


class StatsRepository(Protocol):
    """Persistence interface for meal log statistics."""

    def list_meal_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealLogRecord]:
        """Return meal logs with ``start <= meal_date <= end``."""

    def list_recent_meal_logs(self, user_id: UUID, limit: int) -> list[MealLogRecord]:
        """Return the most recent meal logs."""

    def upsert_daily_summary(self, summary: DailySummary) -> None:
        """Insert or replace the summary row for a user and date."""

    def list_daily_summaries(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailySummary]:
        """Return stored summaries with ``start <= summary_date <= end``."""


@dataclass
class StatsService:
    """Service for per-day statistics.

    Totals are always recomputed from meal logs. The stored summary row is a
    snapshot of that computation, so rewriting it is safe to repeat.
    """

    repository: StatsRepository

    def summarize_day(
        self,
        user_id: UUID,
        day: date,
        protein_target_g: float,
        hp_end_of_day: int | None = None,
    ) -> DailySummary:
        """Return the totals for one day."""
        logs = self.repository.list_meal_logs(user_id, day, day)
        return summarize_logs(user_id, day, logs, protein_target_g, hp_end_of_day)

    def refresh_daily_summary(
        self,
        user_id: UUID,
        day: date,
        protein_target_g: float,
        hp_end_of_day: int | None = None,
    ) -> DailySummary:
        """Recompute a day's summary and store it.

        Without ``hp_end_of_day`` the stored snapshot's HP is kept.
        """
        if hp_end_of_day is None:
            stored = self.repository.list_daily_summaries(user_id, day, day)
            if stored:
                hp_end_of_day = stored[0].hp_end_of_day
        summary =self.summarize_day(user_id, day, protein_target_g, hp_end_of_day)
        self.repository.upsert_daily_summary(summary)
        return summary

    def get_period(
        self,
        user_id: UUID,
        end_day: date,
        days: int,
        protein_target_g: float,
    ) -> list[DailySummary]:
        """Return one summary per day, oldest first, ending on ``end_day``."""
        start = end_day - timedelta(days=max(days, 1) - 1)
        logs = self.repository.list_meal_logs(user_id, start, end_day)
        stored = {
            summary.summary_date: summary
            for summary in self.repository.list_daily_summaries(
                user_id, start, end_day
            )
        }
        by_day: dict[date, list[MealLogRecord]] = {}
        for log in logs:
            by_day.setdefault(log.meal_date, []).append(log)

        period = []
        day = start
        while day <= end_day:
            snapshot = stored.get(day)
            period.append(
                summarize_logs(
                    user_id,
                    day,
                    by_day.get(day, []),
                    protein_target_g,
                    snapshot.hp_end_of_day if snapshot else None,
                )
            )
            day += timedelta(days=1)
        return period

    def get_history(self, user_id: UUID, limit: int = 10) -> list[MealLogRecord]:
        """Return recent meal logs."""
        return self.repository.list_recent_meal_logs(user_id, limit)


def summarize_logs(
    user_id: UUID,
    day: date,
    logs: list[MealLogRecord],
    protein_target_g: float,
    hp_end_of_day: int | None,
) -> DailySummary:
    """Build a day's summary from the meal logs dated on it."""
    day_logs = [log for log in logs if log.meal_date == day]
    nutrients = sum_nutrients(log.totals.nutrients for log in day_logs)
    return DailySummary(
        user_id=user_id,
        summary_date=day,
        nutrients=nutrients,
        meal_count=len(day_logs),
        xp_gained_today=sum(log.awarded_xp for log in day_logs),
        hp_end_of_day=hp_end_of_day,
        protein_goal_hit=bool(day_logs) and nutrients.protein_g >= protein_target_g,
    )
