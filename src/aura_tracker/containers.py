"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from aura_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from aura_tracker.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from aura_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from aura_tracker.adapters.supabase_stats_repository import SupabaseStatsRepository
from aura_tracker.config import Settings
from aura_tracker.services.meals import MealLogService
from aura_tracker.services.profiles import ProfileService
from aura_tracker.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    meal_log_service: MealLogService
    stats_service: StatsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    stats_service = StatsService(SupabaseStatsRepository(supabase_client))
    meal_log_service = MealLogService(
        food_repository=SupabaseFoodRepository(supabase_client),
        repository=SupabaseMealLogRepository(supabase_client),
        profile_service=profile_service,
        stats_service=stats_service,
        timezone_name=resolved_settings.timezone,
    )
    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        meal_log_service=meal_log_service,
        stats_service=stats_service,
    )
