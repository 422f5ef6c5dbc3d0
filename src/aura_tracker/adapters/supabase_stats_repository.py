"""Supabase repository for meal log statistics and daily summaries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from aura_tracker.adapters.supabase_meal_log_repository import (
    TOTAL_COLUMNS,
    parse_meal_log,
)
from aura_tracker.domain.meals import DailySummary, MealLogRecord
from aura_tracker.domain.nutrition import Nutrients
from aura_tracker.services.stats import StatsRepository


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for stats queries."""

    client: Client

    def list_meal_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealLogRecord]:
        """Return meal logs dated within the range, inclusive."""
        response = (
            self.client.table("meal_logs")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("meal_date", start.isoformat())
            .lte("meal_date", end.isoformat())
            .order("logged_at", desc=False)
            .execute()
        )
        return [parse_meal_log(row) for row in response.data or []]

    def list_recent_meal_logs(self, user_id: UUID, limit: int) -> list[MealLogRecord]:
        """Return recent meal logs for a user."""
        response = (
            self.client.table("meal_logs")
            .select("*")
            .eq("user_id", str(user_id))
            .order("logged_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [parse_meal_log(row) for row in response.data or []]

    def upsert_daily_summary(self, summary: DailySummary) -> None:
        """Insert or replace the summary row for the user and date."""
        self.client.table("daily_summaries").upsert(
            {
                "user_id": str(summary.user_id),
                "summary_date": summary.summary_date.isoformat(),
                **{
                    column: getattr(summary.nutrients, field)
                    for field, column in TOTAL_COLUMNS.items()
                },
                "meal_count": summary.meal_count,
                "xp_gained_today": summary.xp_gained_today,
                "hp_end_of_day": summary.hp_end_of_day,
                "protein_goal_hit": summary.protein_goal_hit,
            },
            on_conflict="user_id,summary_date",
        ).execute()

    def list_daily_summaries(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailySummary]:
        """Return stored summaries within the range, inclusive."""
        response = (
            self.client.table("daily_summaries")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("summary_date", start.isoformat())
            .lte("summary_date", end.isoformat())
            .order("summary_date", desc=False)
            .execute()
        )
        return [_parse_summary(row) for row in response.data or []]


def _parse_summary(row: dict[str, object]) -> DailySummary:
    hp_end = row.get("hp_end_of_day")
    return DailySummary(
        user_id=UUID(str(row["user_id"])),
        summary_date=date.fromisoformat(str(row["summary_date"])),
        nutrients=Nutrients(
            **{
                field: float(row.get(column) or 0.0)
                for field, column in TOTAL_COLUMNS.items()
            }
        ),
        meal_count=int(row.get("meal_count") or 0),
        xp_gained_today=int(row.get("xp_gained_today") or 0),
        hp_end_of_day=int(hp_end) if hp_end is not None else None,
        protein_goal_hit=bool(row.get("protein_goal_hit", False)),
    )
