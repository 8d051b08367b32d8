# config/badges_config.py

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from config.points_config import ActivityType


class BadgeCriteria(str, Enum):
    ACTIVITY_COUNT               = "ACTIVITY_COUNT"
    SPECIFIC_ACTIVITY_TYPE_COUNT = "SPECIFIC_ACTIVITY_TYPE_COUNT"
    USER_LEVEL                   = "USER_LEVEL"
    TOTAL_POINTS                 = "TOTAL_POINTS"


@dataclass(frozen=True)
class BadgeDefinition:
    id: str
    name: str
    description: str
    image_url: str
    criteria_type: BadgeCriteria
    criteria_threshold: float
    # only used by SPECIFIC_ACTIVITY_TYPE_COUNT
    criteria_activity_type: Optional[ActivityType] = None

    @property
    def criteria(self) -> str:
        """Serialized form stored on the badges table, e.g. ``TOTAL_POINTS:100``."""
        value = f"{self.criteria_type.value}:{self.criteria_threshold:g}"
        if self.criteria_activity_type is not None:
            value += f":{self.criteria_activity_type.value}"
        return value


# Evaluation order follows catalog order
ALL_BADGES: Tuple[BadgeDefinition, ...] = (
    BadgeDefinition(
        id="FIRST_ACTIVITY_BADGE",
        name="Eco-Starter",
        description="You logged your first ecological activity. Keep it up!",
        image_url="https://placehold.co/128x128/A8D895/333333?text=ES",
        criteria_type=BadgeCriteria.ACTIVITY_COUNT,
        criteria_threshold=1,
    ),
    BadgeDefinition(
        id="RECYCLER_BRONZE_BADGE",
        name="Bronze Recycler",
        description="You have recycled 10 kg of materials. Good job!",
        image_url="https://placehold.co/128x128/CD7F32/FFFFFF?text=RB",
        criteria_type=BadgeCriteria.SPECIFIC_ACTIVITY_TYPE_COUNT,
        criteria_threshold=10,
        criteria_activity_type=ActivityType.RECYCLING,
    ),
    BadgeDefinition(
        id="LEVEL_5_REACHED_BADGE",
        name="Level 5 Reached",
        description="You reached level 5. Your commitment is inspiring!",
        image_url="https://placehold.co/128x128/FFD700/333333?text=L5",
        criteria_type=BadgeCriteria.USER_LEVEL,
        criteria_threshold=5,
    ),
    BadgeDefinition(
        id="TREE_PLANTER_BADGE",
        name="Life Planter",
        description="You planted 5 trees. Thanks for giving the planet some air!",
        image_url="https://placehold.co/128x128/228B22/FFFFFF?text=LP",
        criteria_type=BadgeCriteria.SPECIFIC_ACTIVITY_TYPE_COUNT,
        criteria_threshold=5,
        criteria_activity_type=ActivityType.TREE_PLANTING,
    ),
    BadgeDefinition(
        id="POINTS_MASTER_100_BADGE",
        name="Points Master (100)",
        description="You have collected 100 eco-points. Excellent!",
        image_url="https://placehold.co/128x128/8A2BE2/FFFFFF?text=P100",
        criteria_type=BadgeCriteria.TOTAL_POINTS,
        criteria_threshold=100,
    ),
)


def get_badge_catalog() -> Tuple[BadgeDefinition, ...]:
    """FastAPI dependency returning the process-wide badge catalog."""
    return ALL_BADGES
