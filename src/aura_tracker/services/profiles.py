"""Profile onboarding, targets and progress."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from aura_tracker.domain.errors import ProfileExistsError, ProfileNotFoundError
from aura_tracker.domain.game import GameStats, LevelProgress
from aura_tracker.domain.profiles import Profile
from aura_tracker.domain.targets import BodyMetrics, Goal, MacroTargets, ProfileTargets
from aura_tracker.services.numeric import require_positive
from aura_tracker.services.progression import (
    initial_stats,
    level_progress,
    reconcile_stats,
)
from aura_tracker.services.targets import (
    compute_macro_targets,
    default_targets,
    parse_goal,
)

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user, if present."""

    def create_profile(self, profile: Profile) -> Profile:
        """Insert a profile and return it."""

    def update_stats(
        self, user_id: UUID, stats: GameStats, previous: GameStats | None = None
    ) -> bool:
        """Persist XP, HP, level, rank and streak fields.

        When ``previous`` is given the write only applies if the stored XP and
        HP still match it. Returns whether a row was updated.
        """

    def update_targets(
        self,
        user_id: UUID,
        targets: ProfileTargets,
        metrics: BodyMetrics,
        goal: Goal,
    ) -> None:
        """Persist targets together with the metrics they came from."""


@dataclass
class ProfileService:
    """Application service for profile lifecycle actions."""

    repository: ProfileRepository

    def create_profile(
        self,
        user_id: UUID,
        display_name: str | None,
        metrics: BodyMetrics,
        goal: Goal | str,
    ) -> Profile:
        """Create a profile with computed targets and fresh game stats.

        Onboarding never replaces an existing profile, so earned XP is kept.
        """
        if self.repository.get_profile(user_id) is not None:
            raise ProfileExistsError(user_id)
        resolved_goal = parse_goal(goal)
        profile = Profile(
            id=user_id,
            display_name=display_name,
            metrics=metrics,
            goal=resolved_goal,
            targets=default_targets(metrics, resolved_goal),
            stats=initial_stats(),
        )
        return self.repository.create_profile(profile)

    def get_profile(self, user_id: UUID) -> Profile:
        """Return a profile with level and rank derived from its XP."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        stats = reconcile_stats(profile.stats)
        if stats != profile.stats:
            _logger.warning(
                "Stored stats out of sync for %s: level=%s rank=%s xp=%s",
                user_id,
                profile.stats.current_level,
                profile.stats.rank,
                profile.stats.total_xp,
            )
            profile = replace(profile, stats=stats)
        return profile

    def save_stats(
        self, user_id: UUID, stats: GameStats, previous: GameStats | None = None
    ) -> bool:
        """Persist updated game stats if they still match ``previous``."""
        return self.repository.update_stats(user_id, stats, previous)

    def recalculate_targets(
        self,
        user_id: UUID,
        weight_kg: float | None = None,
        goal: Goal | str | None = None,
    ) -> Profile:
        """Recompute macro targets from current metrics, keeping micros."""
        profile = self.get_profile(user_id)
        metrics = profile.metrics
        if weight_kg is not None:
            metrics = replace(metrics, weight_kg=weight_kg)
        resolved_goal = parse_goal(goal) if goal is not None else profile.goal
        targets = profile.targets.with_macros(
            compute_macro_targets(metrics, resolved_goal)
        )
        self.repository.update_targets(user_id, targets, metrics, resolved_goal)
        return replace(profile, metrics=metrics, goal=resolved_goal, targets=targets)

    def update_targets(self, user_id: UUID, macros: MacroTargets) -> Profile:
        """Store user-edited macro targets."""
        for name in (
            "protein_target_g",
            "carbs_target_g",
            "fats_target_g",
            "calories_target",
        ):
            require_positive(name, getattr(macros, name))
        profile = self.get_profile(user_id)
        targets = profile.targets.with_macros(macros)
        self.repository.update_targets(
            user_id, targets, profile.metrics, profile.goal
        )
        return replace(profile, targets=targets)

    def get_progress(self, user_id: UUID) -> LevelProgress:
        """Return level progress for a user's cumulative XP."""
        return level_progress(self.get_profile(user_id).stats.total_xp)
