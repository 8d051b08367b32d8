# config/points_config.py

from enum import Enum


class ActivityType(str, Enum):
    RECYCLING     = "RECYCLING"
    TREE_PLANTING = "TREE_PLANTING"
    WATER_SAVING  = "WATER_SAVING"
    ENERGY_SAVING = "ENERGY_SAVING"
    COMPOSTING    = "COMPOSTING"
    EDUCATION     = "EDUCATION"
    OTHER         = "OTHER"


class PointReason(str, Enum):
    activity_submitted = "activity_submitted"  # +floor(quantity * rate)
    activity_corrected = "activity_corrected"  # admin edit, signed delta
    activity_deleted   = "activity_deleted"    # admin delete, -activity points


# Points awarded per unit of quantity
ACTIVITY_POINTS_MAP = {
    ActivityType.RECYCLING:     5,
    ActivityType.TREE_PLANTING: 5,
    ActivityType.WATER_SAVING:  2,
    ActivityType.ENERGY_SAVING: 2,
    ActivityType.COMPOSTING:    5,
    ActivityType.EDUCATION:     5,
    ActivityType.OTHER:         2,
}

# Width of one level bucket
POINTS_PER_LEVEL = 500
