from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from api.user.user_schema import LeaderboardEntry, PointsLogEntry, UserProfileResponse
from api.user.user_service import (
    build_profile,
    get_leaderboard,
    get_user_points_log,
    get_user_profile,
)

def get_profile_details(db: Session, current_user: dict) -> UserProfileResponse:
    user = get_user_profile(db, current_user["id"])
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return UserProfileResponse(**build_profile(user))

def get_my_points_log(db: Session, current_user: dict) -> List[PointsLogEntry]:
    return get_user_points_log(db, current_user["id"])

def get_leaderboard_controller(db: Session, limit: int) -> List[LeaderboardEntry]:
    return get_leaderboard(db, limit)
