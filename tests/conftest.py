"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from aura_tracker.config import Settings
from aura_tracker.containers import AppContainer
from aura_tracker.domain.game import GameStats
from aura_tracker.domain.meals import (
    DailySummary,
    MealEvaluation,
    MealLogRecord,
    MealType,
)
from aura_tracker.domain.nutrition import FoodProfile, MealItem, MealTotals, Nutrients
from aura_tracker.domain.profiles import Profile
from aura_tracker.domain.targets import (
    BodyMetrics,
    Goal,
    ProfileTargets,
)
from aura_tracker.services.meals import (
    FoodRepository,
    MealLogRepository,
    MealLogService,
)
from aura_tracker.services.profiles import ProfileRepository, ProfileService
from aura_tracker.services.stats import StatsRepository, StatsService

API_TOKEN = "test-token"

CHICKEN_BOWL = FoodProfile(
    id=UUID("11111111-1111-1111-1111-111111111111"),
    name="Chicken Rajma Bowl",
    category="main",
    per_100g=Nutrients(
        calories=200,
        protein_g=16,
        carbs_g=10,
        fats_g=5,
        fiber_g=6,
        magnesium_mg=80,
        zinc_mg=3,
    ),
    is_high_protein=True,
    serving_size_g=250,
)

SWEET_DHOKLA = FoodProfile(
    id=UUID("22222222-2222-2222-2222-222222222222"),
    name="Sweet Dhokla",
    category="snack",
    per_100g=Nutrients(
        calories=160,
        protein_g=5,
        carbs_g=28,
        fats_g=4,
        fiber_g=1,
        magnesium_mg=20,
        zinc_mg=0.5,
    ),
    typical_oil_ml=10,
)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)
    fail_stats_update: bool = False
    concurrent_stats: list[GameStats] = field(default_factory=list)

    def get_profile(self, user_id: UUID) -> Profile | None:
        return self.profiles.get(user_id)

    def create_profile(self, profile: Profile) -> Profile:
        self.profiles[profile.id] = profile
        return profile

    def update_stats(
        self, user_id: UUID, stats: GameStats, previous: GameStats | None = None
    ) -> bool:
        if self.fail_stats_update:
            raise RuntimeError("profiles table unavailable")
        if self.concurrent_stats:
            # another request commits between this request's read and write
            self.profiles[user_id] = replace(
                self.profiles[user_id], stats=self.concurrent_stats.pop(0)
            )
        current = self.profiles[user_id].stats
        if previous is not None and (
            current.total_xp != previous.total_xp
            or current.current_hp != previous.current_hp
        ):
            return False
        self.profiles[user_id] = replace(self.profiles[user_id], stats=stats)
        return True

    def update_targets(
        self,
        user_id: UUID,
        targets: ProfileTargets,
        metrics: BodyMetrics,
        goal: Goal,
    ) -> None:
        self.profiles[user_id] = replace(
            self.profiles[user_id], targets=targets, metrics=metrics, goal=goal
        )


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food catalog for tests."""

    foods: dict[UUID, FoodProfile] = field(
        default_factory=lambda: {
            CHICKEN_BOWL.id: CHICKEN_BOWL,
            SWEET_DHOKLA.id: SWEET_DHOKLA,
        }
    )

    def get_food(self, food_id: UUID) -> FoodProfile | None:
        return self.foods.get(food_id)


@dataclass
class InMemoryMealLogRepository(MealLogRepository):
    """In-memory meal log repository for tests."""

    logs: list[MealLogRecord] = field(default_factory=list)

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
        record = MealLogRecord(
            id=uuid4(),
            user_id=user_id,
            meal_date=meal_date,
            logged_at=logged_at,
            meal_type=meal_type,
            items=items,
            totals=evaluation.totals,
            xp_earned=evaluation.xp.total_xp,
            hp_impact=evaluation.hp.total_change,
            coach_tip=evaluation.coach_tip,
            optimization_score=evaluation.optimization_score,
            streak_bonus_xp=streak_bonus_xp,
        )
        self.logs.append(record)
        return record

    def update_streak_bonus(
        self, meal_id: UUID, streak_bonus_xp: int
    ) -> MealLogRecord:
        index = next(i for i, log in enumerate(self.logs) if log.id == meal_id)
        self.logs[index] = replace(self.logs[index], streak_bonus_xp=streak_bonus_xp)
        return self.logs[index]


@dataclass
class InMemoryStatsRepository(StatsRepository):
    """In-memory stats repository for tests."""

    logs: list[MealLogRecord] = field(default_factory=list)
    summaries: dict[tuple[UUID, date], DailySummary] = field(default_factory=dict)
    fail_upsert: bool = False

    def list_meal_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealLogRecord]:
        return sorted(
            (
                log
                for log in self.logs
                if log.user_id == user_id and start <= log.meal_date <= end
            ),
            key=lambda log: log.logged_at,
        )

    def list_recent_meal_logs(self, user_id: UUID, limit: int) -> list[MealLogRecord]:
        return sorted(
            (log for log in self.logs if log.user_id == user_id),
            key=lambda log: log.logged_at,
            reverse=True,
        )[:limit]

    def upsert_daily_summary(self, summary: DailySummary) -> None:
        if self.fail_upsert:
            raise RuntimeError("daily_summaries table unavailable")
        self.summaries[(summary.user_id, summary.summary_date)] = summary

    def list_daily_summaries(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailySummary]:
        return [
            summary
            for (owner, day), summary in sorted(self.summaries.items())
            if owner == user_id and start <= day <= end
        ]


def make_meal_log(  # noqa: PLR0913
    user_id: UUID,
    meal_date: date,
    protein_g: float = 20.0,
    calories: float = 400.0,
    xp_earned: int = 20,
    hour: int = 12,
) -> MealLogRecord:
    """Build a stored meal log with the given totals."""
    return MealLogRecord(
        id=uuid4(),
        user_id=user_id,
        meal_date=meal_date,
        logged_at=datetime(
            meal_date.year, meal_date.month, meal_date.day, hour, tzinfo=UTC
        ),
        meal_type=MealType.LUNCH,
        items=[],
        totals=MealTotals(
            nutrients=Nutrients(calories=calories, protein_g=protein_g),
        ),
        xp_earned=xp_earned,
        hp_impact=0,
        coach_tip="",
        optimization_score=50,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token=API_TOKEN,
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def stats_repository() -> InMemoryStatsRepository:
    return InMemoryStatsRepository()


@pytest.fixture
def meal_log_repository(
    stats_repository: InMemoryStatsRepository,
) -> InMemoryMealLogRepository:
    return InMemoryMealLogRepository(logs=stats_repository.logs)


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository)


@pytest.fixture
def stats_service(stats_repository: InMemoryStatsRepository) -> StatsService:
    return StatsService(stats_repository)


@pytest.fixture
def meal_log_service(
    meal_log_repository: InMemoryMealLogRepository,
    profile_service: ProfileService,
    stats_service: StatsService,
) -> MealLogService:
    return MealLogService(
        food_repository=InMemoryFoodRepository(),
        repository=meal_log_repository,
        profile_service=profile_service,
        stats_service=stats_service,
    )


@pytest.fixture
def profile(profile_service: ProfileService) -> Profile:
    return profile_service.create_profile(
        user_id=uuid4(),
        display_name="Arjun",
        metrics=BodyMetrics(weight_kg=70, height_cm=175, age=22),
        goal=Goal.RECOMP,
    )


@pytest.fixture
def container(
    settings: Settings,
    profile_service: ProfileService,
    meal_log_service: MealLogService,
    stats_service: StatsService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        meal_log_service=meal_log_service,
        stats_service=stats_service,
    )
