"""Point total to level, grade and progress mapping.

Level and grade use separate ladders: ALPHA starts at 46 while A+ starts at 53.
"""

from __future__ import annotations

from geckotrack.domain.errors import ValidationError
from geckotrack.domain.models import GeckoLevel, LevelProgress

# (lower bound, level), highest first
LEVEL_THRESHOLDS: tuple[tuple[int, GeckoLevel], ...] = (
    (46, GeckoLevel.ALPHA),
    (31, GeckoLevel.STALKER),
    (16, GeckoLevel.CLIMBER),
    (0, GeckoLevel.HATCHLING),
)

GRADE_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (53, "A+"),
    (46, "A"),
    (36, "B"),
    (26, "C"),
    (16, "D"),
    (0, "E"),
)

# Shown as the progress ceiling once ALPHA is reached
MAX_PROGRESS_POINTS = 53
MAX_LEVEL_MARKER = "MAX"


def _check_points(points: int) -> None:
    if points < 0:
        raise ValidationError(f"Point total cannot be negative: {points}")


def level(points: int) -> GeckoLevel:
    _check_points(points)
    for floor, tier in LEVEL_THRESHOLDS:
        if points >= floor:
            return tier
    return GeckoLevel.HATCHLING


def grade(points: int) -> str:
    _check_points(points)
    for floor, letter in GRADE_THRESHOLDS:
        if points >= floor:
            return letter
    return "E"


def level_progress(points: int) -> LevelProgress:
    """Return how far ``points`` sits inside the current tier."""
    _check_points(points)
    ascending = list(reversed(LEVEL_THRESHOLDS))
    for index, (floor, _tier) in enumerate(ascending):
        if index + 1 == len(ascending):
            break
        ceiling, next_tier = ascending[index + 1]
        if points < ceiling:
            percent = (points - floor) / (ceiling - floor) * 100
            return LevelProgress(
                current=points,
                max=ceiling,
                percent=min(100.0, max(0.0, percent)),
                next=next_tier.value,
            )
    return LevelProgress(
        current=points,
        max=MAX_PROGRESS_POINTS,
        percent=100.0,
        next=MAX_LEVEL_MARKER,
    )
