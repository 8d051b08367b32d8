from types import SimpleNamespace

import pytest

from config.points_config import ActivityType
from services.points_service import (
    apply_points_accrual,
    apply_points_correction,
    calculate_activity_points,
    level_for_points,
    points_per_unit,
    points_to_next_level,
)


@pytest.mark.parametrize(
    "activity_type, quantity, expected",
    [
        (ActivityType.RECYCLING, 2, 10),
        (ActivityType.RECYCLING, 20, 100),
        (ActivityType.TREE_PLANTING, 2.3, 11),
        (ActivityType.WATER_SAVING, 2.5, 5),
        (ActivityType.ENERGY_SAVING, 1.3, 2),
        (ActivityType.COMPOSTING, 1, 5),
        (ActivityType.EDUCATION, 3, 15),
        (ActivityType.OTHER, 7, 14),
        ("RECYCLING", 3, 15),
    ],
)
def test_activity_points_are_floor_of_quantity_times_rate(activity_type, quantity, expected):
    assert calculate_activity_points(activity_type, quantity) == expected


@pytest.mark.parametrize("unknown", ["GARDENING", None, "", 42])
def test_unknown_type_uses_other_rate(unknown):
    assert points_per_unit(unknown) == points_per_unit(ActivityType.OTHER) == 2
    assert calculate_activity_points(unknown, 3) == 6


@pytest.mark.parametrize(
    "points, level",
    [(0, 1), (1, 1), (499, 1), (500, 2), (999, 2), (1000, 3), (2499, 5), (-30, 1), (None, 1)],
)
def test_level_for_points(points, level):
    assert level_for_points(points) == level


def test_points_to_next_level():
    assert points_to_next_level(0) == 500
    assert points_to_next_level(10) == 490
    assert points_to_next_level(500) == 500
    assert points_to_next_level(999) == 1


def test_accrual_raises_level_on_threshold():
    user = SimpleNamespace(points=495, level=1)
    assert apply_points_accrual(user, 10) is True
    assert (user.points, user.level) == (505, 2)


def test_accrual_never_lowers_level():
    # stale stored level above what the points imply
    user = SimpleNamespace(points=100, level=3)
    assert apply_points_accrual(user, 10) is False
    assert (user.points, user.level) == (110, 3)


def test_correction_recomputes_level_downwards():
    user = SimpleNamespace(points=600, level=2)
    assert apply_points_correction(user, -150) == 1
    assert (user.points, user.level) == (450, 1)


def test_correction_keeps_level_when_still_above_threshold():
    user = SimpleNamespace(points=600, level=2)
    apply_points_correction(user, -100)
    assert (user.points, user.level) == (500, 2)


def test_correction_clamps_at_zero():
    user = SimpleNamespace(points=30, level=1)
    apply_points_correction(user, -50)
    assert (user.points, user.level) == (0, 1)


def test_correction_with_zero_difference_still_normalizes_level():
    user = SimpleNamespace(points=100, level=3)
    apply_points_correction(user, 0)
    assert (user.points, user.level) == (100, 1)
