"""Level, rank, HP and streak progression.

Level and rank are always derived from ``total_xp``; the functions that
produce new ``GameStats`` recompute both instead of accepting them as input.
"""

import math
from dataclasses import replace
from datetime import date, timedelta

from aura_tracker.domain.errors import InvalidInputError
from aura_tracker.domain.game import GameStats, LevelProgress, Rank, StatsUpdate
from aura_tracker.services.numeric import round_int
from aura_tracker.services.xp import streak_bonus

MAX_HP = 100

# (minimum level, rank), highest first
_RANK_TIERS = ((70, Rank.TITAN), (30, Rank.ELITE), (10, Rank.SOLDIER))


def xp_for_next_level(level: int) -> int:
    """XP needed to go from ``level`` to ``level + 1``."""
    _require_level(level)
    return math.floor(100 * level**1.5)


def total_xp_for_level(level: int) -> int:
    """Cumulative XP needed to reach ``level`` from zero."""
    _require_level(level)
    return sum(xp_for_next_level(i) for i in range(1, level))


def calculate_level(total_xp: int) -> int:
    """Highest level whose cumulative requirement is covered by ``total_xp``."""
    _require_xp("total_xp", total_xp)
    level = 1
    next_threshold = xp_for_next_level(level)
    while total_xp >= next_threshold:
        level += 1
        next_threshold += xp_for_next_level(level)
    return level


def calculate_level_progress(total_xp: int) -> int:
    """Percent of the way from the current level to the next."""
    return level_progress(total_xp).percent


def get_rank(level: int) -> Rank:
    _require_level(level)
    for min_level, rank in _RANK_TIERS:
        if level >= min_level:
            return rank
    return Rank.NOVICE


def level_progress(total_xp: int) -> LevelProgress:
    """Level, rank and in-level progress for a cumulative XP value."""
    level = calculate_level(total_xp)
    needed = xp_for_next_level(level)
    into_level = total_xp - total_xp_for_level(level)
    return LevelProgress(
        level=level,
        rank=get_rank(level),
        percent=round_int(100 * into_level / needed),
        xp_into_level=into_level,
        xp_for_next_level=needed,
    )


def initial_stats(max_hp: int = MAX_HP) -> GameStats:
    """Game state of a freshly onboarded profile."""
    return GameStats(
        total_xp=0,
        current_level=1,
        current_hp=max_hp,
        max_hp=max_hp,
        rank=Rank.NOVICE,
    )


def reconcile_stats(stats: GameStats) -> GameStats:
    """Return stats with level and rank rederived from total XP."""
    level = calculate_level(stats.total_xp)
    return replace(
        stats,
        current_level=level,
        rank=get_rank(level),
        current_hp=apply_hp_change(stats.current_hp, 0, stats.max_hp),
    )


def apply_hp_change(current_hp: int, change: int, max_hp: int) -> int:
    """Apply an HP delta, clamped to ``[0, max_hp]``."""
    return max(0, min(max_hp, current_hp + change))


def advance_streak(stats: GameStats, day: date) -> tuple[GameStats, bool]:
    """Update streak counters for a meal logged on ``day``.

    Returns the new stats and whether the streak moved to a new day.
    """
    last = stats.last_log_date
    if last is not None and day <= last:
        return stats, False
    if last is not None and day - last == timedelta(days=1):
        streak = stats.current_streak + 1
    else:
        streak = 1
    updated = replace(
        stats,
        current_streak=streak,
        longest_streak=max(stats.longest_streak, streak),
        last_log_date=day,
    )
    return updated, True


def apply_meal(
    stats: GameStats, xp_gained: int, hp_change: int, day: date
) -> StatsUpdate:
    """Apply a meal's XP and HP results to a profile's game state."""
    _require_xp("xp_gained", xp_gained)
    previous_level = calculate_level(stats.total_xp)
    streaked, advanced = advance_streak(stats, day)
    bonus = streak_bonus(streaked.current_streak) if advanced else 0
    total_xp = stats.total_xp + xp_gained + bonus
    level = calculate_level(total_xp)
    updated = replace(
        streaked,
        total_xp=total_xp,
        current_level=level,
        rank=get_rank(level),
        current_hp=apply_hp_change(stats.current_hp, hp_change, stats.max_hp),
    )
    return StatsUpdate(
        stats=updated,
        xp_gained=xp_gained,
        streak_bonus_xp=bonus,
        hp_change=hp_change,
        leveled_up=level > previous_level,
    )


def _require_level(level: int) -> None:
    if isinstance(level, bool) or not isinstance(level, int) or level < 1:
        raise InvalidInputError(f"level must be an integer >= 1, got {level!r}")


def _require_xp(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError(
            f"{name} must be a non-negative integer, got {value!r}"
        )
