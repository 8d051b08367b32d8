# badges_routes.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.badges.badges_controller import get_badge_details, list_all_badges, read_my_badges
from api.badges.badges_schema import BadgeRead, UserBadgeRead
from config.database import get_db
from middlewares.auth_middleware import auth_middleware

router = APIRouter(prefix="/achievements", tags=["Achievements"])


@router.get("/badges", response_model=List[BadgeRead], summary="Badge catalog")
def get_badges(db: Session = Depends(get_db)):
    return list_all_badges(db)


@router.get("/badges/{badge_id}", response_model=BadgeRead, summary="A single badge and its criteria")
def get_badge(badge_id: str, db: Session = Depends(get_db)):
    return get_badge_details(badge_id, db)


@router.get("/me/badges", response_model=List[UserBadgeRead], summary="Badges earned by the current user, newest first")
def get_my_badges(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return read_my_badges(db, current_user)
