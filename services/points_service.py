"""
Points and level rules.

Normal accrual (activity submission) can only raise the stored level.
Admin corrections fully recompute it, so a level can go down there.
"""
import math
from decimal import Decimal
from typing import Any, Optional

from config.points_config import ACTIVITY_POINTS_MAP, POINTS_PER_LEVEL, ActivityType


def points_per_unit(activity_type: Any) -> int:
    """Rate for `activity_type`; anything unknown gets the OTHER rate."""
    try:
        key = ActivityType(getattr(activity_type, "value", activity_type))
    except ValueError:
        return ACTIVITY_POINTS_MAP[ActivityType.OTHER]
    return ACTIVITY_POINTS_MAP.get(key, ACTIVITY_POINTS_MAP[ActivityType.OTHER])


def calculate_activity_points(activity_type: Any, quantity: float) -> int:
    # str() first so 2.3 stays 2.3 and not 2.2999...
    return math.floor(Decimal(str(quantity)) * points_per_unit(activity_type))


def level_for_points(points: Optional[int]) -> int:
    return max(0, points or 0) // POINTS_PER_LEVEL + 1


def points_to_next_level(points: int) -> int:
    current = max(0, points or 0)
    return level_for_points(current) * POINTS_PER_LEVEL - current


def apply_points_accrual(user, delta: int) -> bool:
    """
    Add points earned by a new activity. The level is only ever raised here.
    Returns True if the level went up.
    """
    user.points = max(0, (user.points or 0) + delta)
    new_level = level_for_points(user.points)
    if new_level > (user.level or 1):
        user.level = new_level
        return True
    return False


def apply_points_correction(user, delta: int) -> int:
    """
    Apply a signed admin correction. Points are clamped at zero and the level
    is recomputed from scratch. Returns the new level.
    """
    user.points = max(0, (user.points or 0) + delta)
    user.level = level_for_points(user.points)
    return user.level
