"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from aura_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from aura_tracker.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from aura_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from aura_tracker.adapters.supabase_stats_repository import SupabaseStatsRepository
from aura_tracker.domain.errors import MissingTargetError
from aura_tracker.domain.game import Rank
from aura_tracker.domain.meals import DailySummary, MealType
from aura_tracker.domain.nutrition import MealTotals, Nutrients
from aura_tracker.domain.profiles import Profile
from aura_tracker.domain.targets import BodyMetrics, Goal, ProfileTargets
from aura_tracker.services.aggregation import build_meal_item
from aura_tracker.services.progression import initial_stats
from aura_tracker.services.scoring import evaluate_meal
from aura_tracker.services.targets import default_targets
from tests.conftest import CHICKEN_BOWL


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "upsert": []}
    )
    last_payload: object | None = None
    last_on_conflict: str | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str | None = None
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _profile_row(user_id: str, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": user_id,
        "display_name": "Arjun",
        "height_cm": 175,
        "current_weight_kg": 70,
        "age": 22,
        "goal": "recomp",
        "protein_target_g": 140,
        "carbs_target_g": 374,
        "fats_target_g": 63,
        "calories_target": 2623,
        "magnesium_target_mg": 400,
        "zinc_target_mg": 15,
        "fiber_target_g": 40,
        "total_xp": 150,
        "current_level": 2,
        "current_hp": 80,
        "max_hp": 100,
        "rank": "Novice",
        "current_streak": 3,
        "longest_streak": 5,
        "last_log_date": "2026-03-09",
    }
    row.update(overrides)
    return row


def _targets() -> ProfileTargets:
    return ProfileTargets.from_row(_profile_row(str(uuid4())))


def _meal_log_row(user_id: str, meal_date: str) -> dict[str, object]:
    return {
        "id": str(uuid4()),
        "user_id": user_id,
        "logged_at": f"{meal_date}T12:30:00+00:00",
        "meal_date": meal_date,
        "meal_type": "lunch",
        "items": [
            {
                "food_id": str(CHICKEN_BOWL.id),
                "name": "Chicken Rajma Bowl",
                "quantity_g": 200,
                "calories": 400,
                "protein_g": 32,
            }
        ],
        "total_calories": 400,
        "total_protein_g": 32,
        "total_fiber_g": 12,
        "has_hidden_oil": False,
        "has_gujju_sugar": False,
        "tadka_oil_ml": 0,
        "xp_earned": 175,
        "hp_impact": 20,
        "coach_tip": "tip",
        "optimization_score": 91,
    }


def test_supabase_profile_repository_parses_row() -> None:
    client = FakeSupabaseClient()
    user_id = str(uuid4())
    client.table("profiles").queue("select", [_profile_row(user_id)])

    profile = SupabaseProfileRepository(client).get_profile(uuid4())

    assert profile is not None
    assert str(profile.id) == user_id
    assert profile.goal == Goal.RECOMP
    assert profile.targets.calories_target == 2623
    assert profile.stats.current_hp == 80
    assert profile.stats.rank == Rank.NOVICE
    assert profile.stats.last_log_date == date(2026, 3, 9)


def test_supabase_profile_repository_missing_target() -> None:
    client = FakeSupabaseClient()
    client.table("profiles").queue(
        "select", [_profile_row(str(uuid4()), protein_target_g=None)]
    )

    with pytest.raises(MissingTargetError):
        SupabaseProfileRepository(client).get_profile(uuid4())


def test_supabase_profile_repository_missing_profile() -> None:
    assert SupabaseProfileRepository(FakeSupabaseClient()).get_profile(uuid4()) is None


def test_supabase_profile_repository_updates_stats() -> None:
    client = FakeSupabaseClient()
    table = client.table("profiles")
    user_id = uuid4()

    SupabaseProfileRepository(client).update_stats(user_id, initial_stats())

    assert isinstance(table.last_payload, dict)
    assert table.last_payload["total_xp"] == 0
    assert table.last_payload["rank"] == "Novice"
    assert table.last_payload["last_log_date"] is None
    assert ("eq", "id", str(user_id)) in table.last_filters


def test_supabase_food_repository_reads_per_100g_columns() -> None:
    client = FakeSupabaseClient()
    food_id = str(uuid4())
    client.table("food_database").queue(
        "select",
        [
            {
                "id": food_id,
                "name_english": "Paneer Bhurji",
                "category": "main",
                "calories_per_100g": 265,
                "protein_per_100g": 18.3,
                "fats_per_100g": 20.8,
                "zinc_per_100g": 2.7,
                "is_high_protein": True,
                "typical_tadka_oil_ml": 8,
                "bowl_size_g": 150,
            }
        ],
    )

    food = SupabaseFoodRepository(client).get_food(uuid4())

    assert food is not None
    assert str(food.id) == food_id
    assert food.name == "Paneer Bhurji"
    assert food.per_100g.protein_g == 18.3
    assert food.per_100g.fiber_g == 0.0
    assert food.typical_oil_ml == 8
    assert food.serving_size_g == 150


def test_supabase_meal_log_repository_insert() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_logs")
    user_id = str(uuid4())
    table.queue("insert", [_meal_log_row(user_id, "2026-03-10")])
    item = build_meal_item(CHICKEN_BOWL, 200)
    totals = MealTotals(nutrients=item.nutrients)
    evaluation = evaluate_meal(totals, _targets())

    record = SupabaseMealLogRepository(client).create_meal_log(
        user_id=uuid4(),
        logged_at=datetime(2026, 3, 10, 12, 30, tzinfo=UTC),
        meal_date=date(2026, 3, 10),
        meal_type=MealType.LUNCH,
        items=[item],
        evaluation=evaluation,
    )

    payload = table.last_payload
    assert isinstance(payload, dict)
    assert payload["meal_date"] == "2026-03-10"
    assert payload["meal_time"] == "12:30:00"
    assert payload["total_protein_g"] == 32
    assert payload["xp_earned"] == 175
    assert payload["streak_bonus_xp"] == 0
    assert payload["items"][0]["food_id"] == str(CHICKEN_BOWL.id)
    assert record.meal_type == MealType.LUNCH
    assert record.items[0].nutrients.protein_g == 32
    assert record.totals.nutrients.fiber_g == 12


def test_supabase_meal_log_repository_insert_failure() -> None:
    client = FakeSupabaseClient()
    item = build_meal_item(CHICKEN_BOWL, 100)
    evaluation = evaluate_meal(MealTotals(nutrients=item.nutrients), _targets())

    with pytest.raises(RuntimeError):
        SupabaseMealLogRepository(client).create_meal_log(
            user_id=uuid4(),
            logged_at=datetime(2026, 3, 10, 8, tzinfo=UTC),
            meal_date=date(2026, 3, 10),
            meal_type=MealType.BREAKFAST,
            items=[item],
            evaluation=evaluation,
        )


def test_supabase_stats_repository_lists_by_meal_date() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_logs")
    user_id = str(uuid4())
    table.queue("select", [_meal_log_row(user_id, "2026-03-10")])

    logs = SupabaseStatsRepository(client).list_meal_logs(
        uuid4(), date(2026, 3, 4), date(2026, 3, 10)
    )

    assert len(logs) == 1
    assert logs[0].meal_date == date(2026, 3, 10)
    assert logs[0].xp_earned == 175
    assert ("gte", "meal_date", "2026-03-04") in table.last_filters
    assert ("lte", "meal_date", "2026-03-10") in table.last_filters


def test_supabase_stats_repository_upserts_summary() -> None:
    client = FakeSupabaseClient()
    table = client.table("daily_summaries")
    summary = DailySummary(
        user_id=uuid4(),
        summary_date=date(2026, 3, 10),
        nutrients=Nutrients(calories=1800, protein_g=145),
        meal_count=3,
        xp_gained_today=320,
        hp_end_of_day=90,
        protein_goal_hit=True,
    )

    SupabaseStatsRepository(client).upsert_daily_summary(summary)

    assert table.last_on_conflict == "user_id,summary_date"
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["summary_date"] == "2026-03-10"
    assert table.last_payload["total_protein_g"] == 145
    assert table.last_payload["protein_goal_hit"] is True


def test_supabase_stats_repository_parses_summaries() -> None:
    client = FakeSupabaseClient()
    user_id = str(uuid4())
    client.table("daily_summaries").queue(
        "select",
        [
            {
                "user_id": user_id,
                "summary_date": "2026-03-10",
                "total_calories": 1800,
                "total_protein_g": 145,
                "meal_count": 3,
                "xp_gained_today": 320,
                "hp_end_of_day": None,
                "protein_goal_hit": True,
            }
        ],
    )

    summaries = SupabaseStatsRepository(client).list_daily_summaries(
        uuid4(), date(2026, 3, 4), date(2026, 3, 10)
    )

    assert summaries[0].nutrients.protein_g == 145
    assert summaries[0].hp_end_of_day is None
    assert summaries[0].meal_count == 3


def test_supabase_profile_repository_creates_with_insert() -> None:
    client = FakeSupabaseClient()
    table = client.table("profiles")
    user_id = uuid4()
    table.queue("insert", [_profile_row(str(user_id), total_xp=0, current_level=1)])
    metrics = BodyMetrics(weight_kg=70, height_cm=175, age=22)

    created = SupabaseProfileRepository(client).create_profile(
        Profile(
            id=user_id,
            display_name="Arjun",
            metrics=metrics,
            goal=Goal.RECOMP,
            targets=default_targets(metrics, Goal.RECOMP),
            stats=initial_stats(),
        )
    )

    assert created.id == user_id
    assert table.response_queue["upsert"] == []
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["starting_weight_kg"] == 70
    assert table.last_payload["total_xp"] == 0


def test_supabase_profile_repository_guards_stats_update() -> None:
    client = FakeSupabaseClient()
    table = client.table("profiles")
    user_id = uuid4()
    previous = initial_stats()
    table.queue("update", [_profile_row(str(user_id))])

    repository = SupabaseProfileRepository(client)
    applied = repository.update_stats(user_id, previous, previous)
    stale = repository.update_stats(user_id, previous, previous)

    assert applied is True
    assert stale is False
    assert ("eq", "total_xp", 0) in table.last_filters
    assert ("eq", "current_hp", 100) in table.last_filters


def test_supabase_meal_log_repository_updates_streak_bonus() -> None:
    client = FakeSupabaseClient()
    table = client.table("meal_logs")
    row = {**_meal_log_row(str(uuid4()), "2026-03-10"), "streak_bonus_xp": 25}
    table.queue("update", [row])

    record = SupabaseMealLogRepository(client).update_streak_bonus(
        UUID(str(row["id"])), 25
    )

    assert table.last_payload == {"streak_bonus_xp": 25}
    assert ("eq", "id", row["id"]) in table.last_filters
    assert record.streak_bonus_xp == 25
    assert record.awarded_xp == 200
