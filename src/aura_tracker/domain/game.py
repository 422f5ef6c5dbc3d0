"""Domain models for XP, HP and progression."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum


class Rank(StrEnum):
    """Coarse progression tier derived from level."""

    NOVICE = "Novice"
    SOLDIER = "Soldier"
    ELITE = "Elite"
    TITAN = "Titan"

    @property
    def order(self) -> int:
        """Position of the rank, lowest first."""
        return list(Rank).index(self)


@dataclass(frozen=True)
class ScoreLine:
    """A single bonus, penalty, damage or recovery entry."""

    reason: str
    amount: int


@dataclass(frozen=True)
class XPResult:
    """Breakdown of the XP awarded for a meal."""

    base_xp: int
    bonuses: list[ScoreLine] = field(default_factory=list)
    penalties: list[ScoreLine] = field(default_factory=list)
    total_xp: int = 0


@dataclass(frozen=True)
class HPResult:
    """Breakdown of the HP change caused by a meal."""

    base_change: int = 0
    damages: list[ScoreLine] = field(default_factory=list)
    recoveries: list[ScoreLine] = field(default_factory=list)
    total_change: int = 0


@dataclass(frozen=True)
class GameStats:
    """Persisted game state of a profile."""

    total_xp: int
    current_level: int
    current_hp: int
    max_hp: int
    rank: Rank
    current_streak: int = 0
    longest_streak: int = 0
    last_log_date: date | None = None


@dataclass(frozen=True)
class StatsUpdate:
    """Result of applying a meal to game stats."""

    stats: GameStats
    xp_gained: int
    streak_bonus_xp: int
    hp_change: int
    leveled_up: bool


@dataclass(frozen=True)
class LevelProgress:
    """Level, rank and progress into the current level."""

    level: int
    rank: Rank
    percent: int
    xp_into_level: int
    xp_for_next_level: int
