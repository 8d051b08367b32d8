from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from api.user.user_controller import (
    get_profile_details,
    get_my_points_log,
    get_leaderboard_controller,
)
from api.user.user_schema import LeaderboardEntry, PointsLogEntry, UserProfileResponse

router = APIRouter(prefix="/users", tags=["Users"])

@router.get(
    "/me",
    response_model=UserProfileResponse,
    summary="Current user's points, level and badges"
)
def get_me(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware)
):
    return get_profile_details(db, current_user)

@router.get(
    "/me/points-log",
    response_model=List[PointsLogEntry],
    summary="History of point changes for the current user"
)
def get_points_log(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware)
):
    return get_my_points_log(db, current_user)

@router.get(
    "/leaderboard",
    response_model=List[LeaderboardEntry],
    summary="Top users by points"
)
def leaderboard(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db)
):
    return get_leaderboard_controller(db, limit)
