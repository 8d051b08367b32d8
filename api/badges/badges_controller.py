# badges_controller.py
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from api.badges.badges_schema import BadgeRead, UserBadgeRead
from api.badges.badges_service import BadgeService


def list_all_badges(db: Session) -> List[BadgeRead]:
    return BadgeService(db).list_badges()


def get_badge_details(badge_id: str, db: Session) -> BadgeRead:
    badge = BadgeService(db).get_badge(badge_id)
    if badge is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Badge not found"
        )
    return badge


def read_my_badges(db: Session, current_user: dict) -> List[UserBadgeRead]:
    return BadgeService(db).list_user_badges(current_user["id"])
