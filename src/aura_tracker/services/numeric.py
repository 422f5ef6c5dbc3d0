"""Rounding and input checks shared by the scoring engine."""

import math

from aura_tracker.domain.errors import InvalidInputError


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to the given digits with halves going towards +inf."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    """Round half up to an integer."""
    return math.floor(value + 0.5)


def require_positive(name: str, value: float) -> float:
    """Return value if finite and > 0."""
    if not _is_finite_number(value) or value <= 0:
        raise InvalidInputError(f"{name} must be a positive number, got {value!r}")
    return value


def require_non_negative(name: str, value: float) -> float:
    """Return value if finite and >= 0."""
    if not _is_finite_number(value) or value < 0:
        raise InvalidInputError(
            f"{name} must be a non-negative number, got {value!r}"
        )
    return value


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)
