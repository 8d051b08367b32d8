from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.stats.stats_controller import get_platform_stats_controller
from api.stats.stats_schema import PlatformStats
from config.database import get_db

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("", response_model=PlatformStats, summary="Total users and activities on the platform")
def get_stats(db: Session = Depends(get_db)):
    return get_platform_stats_controller(db)
