"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from aura_tracker.domain.game import GameStats, Rank
from aura_tracker.domain.profiles import Profile
from aura_tracker.domain.targets import BodyMetrics, Goal, ProfileTargets
from aura_tracker.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user, if present."""
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def create_profile(self, profile: Profile) -> Profile:
        """Insert a profile row and return it."""
        payload = {
            "id": str(profile.id),
            "display_name": profile.display_name,
            "height_cm": profile.metrics.height_cm,
            "current_weight_kg": profile.metrics.weight_kg,
            "starting_weight_kg": profile.metrics.weight_kg,
            "age": profile.metrics.age,
            "goal": profile.goal.value,
            **profile.targets.as_dict(),
            **_stats_payload(profile.stats),
        }
        response = self.client.table("profiles").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create profile in Supabase")
        return _parse_profile(response.data[0])

    def update_stats(
        self, user_id: UUID, stats: GameStats, previous: GameStats | None = None
    ) -> bool:
        """Persist stats, guarded on the previous XP and HP when given."""
        query = (
            self.client.table("profiles")
            .update(
                {
                    **_stats_payload(stats),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(user_id))
        )
        if previous is not None:
            query = query.eq("total_xp", previous.total_xp).eq(
                "current_hp", previous.current_hp
            )
        response = query.execute()
        return bool(response.data)

    def update_targets(
        self,
        user_id: UUID,
        targets: ProfileTargets,
        metrics: BodyMetrics,
        goal: Goal,
    ) -> None:
        """Persist targets with the metrics and goal they were derived from."""
        self.client.table("profiles").update(
            {
                **targets.as_dict(),
                "current_weight_kg": metrics.weight_kg,
                "goal": goal.value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(user_id)).execute()


def _stats_payload(stats: GameStats) -> dict[str, object]:
    return {
        "total_xp": stats.total_xp,
        "current_level": stats.current_level,
        "current_hp": stats.current_hp,
        "max_hp": stats.max_hp,
        "rank": stats.rank.value,
        "current_streak": stats.current_streak,
        "longest_streak": stats.longest_streak,
        "last_log_date": stats.last_log_date.isoformat()
        if stats.last_log_date
        else None,
    }


def _parse_profile(row: dict[str, object]) -> Profile:
    last_log_raw = row.get("last_log_date")
    return Profile(
        id=UUID(str(row["id"])),
        display_name=row.get("display_name"),
        metrics=BodyMetrics(
            weight_kg=float(row.get("current_weight_kg", 0.0)),
            height_cm=float(row.get("height_cm", 0.0)),
            age=int(row.get("age", 0)),
        ),
        goal=Goal(row.get("goal") or Goal.RECOMP),
        targets=ProfileTargets.from_row(row),
        stats=GameStats(
            total_xp=int(row.get("total_xp", 0)),
            current_level=int(row.get("current_level", 1)),
            current_hp=int(row.get("current_hp", 0)),
            max_hp=int(row.get("max_hp", 100)),
            rank=Rank(row.get("rank") or Rank.NOVICE),
            current_streak=int(row.get("current_streak", 0)),
            longest_streak=int(row.get("longest_streak", 0)),
            last_log_date=date.fromisoformat(last_log_raw)
            if isinstance(last_log_raw, str) and last_log_raw
            else None,
        ),
    )
