"""Domain models for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from aura_tracker.domain.game import GameStats
from aura_tracker.domain.targets import BodyMetrics, Goal, ProfileTargets


@dataclass(frozen=True)
class Profile:
    """A user's profile with targets and game state."""

    id: UUID
    display_name: str | None
    metrics: BodyMetrics
    goal: Goal
    targets: ProfileTargets
    stats: GameStats
