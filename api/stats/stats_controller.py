from sqlalchemy.orm import Session

from api.stats.stats_schema import PlatformStats
from api.stats.stats_service import get_platform_stats


def get_platform_stats_controller(db: Session) -> PlatformStats:
    return PlatformStats(**get_platform_stats(db))
