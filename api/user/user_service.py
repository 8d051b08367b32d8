from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from api.badges.user_badges_model import UserBadge
from api.user.user_model import User
from api.user.user_points_model import UserPointsLog
from config.points_config import POINTS_PER_LEVEL
from services.points_service import points_to_next_level


def get_user_profile(db: Session, user_id: int) -> Optional[User]:
    """
    Fetch a user with their earned badges in one round trip.
    """
    return (
        db.query(User)
        .options(joinedload(User.badges).joinedload(UserBadge.badge))
        .filter(User.id == user_id)
        .first()
    )


def build_profile(user: User) -> dict:
    points = user.points or 0
    into_level = points - (user.level - 1) * POINTS_PER_LEVEL
    progress = max(0.0, min(100.0, into_level / POINTS_PER_LEVEL * 100))
    badges = sorted(user.badges, key=lambda ub: ub.earned_at, reverse=True)
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "user_type": user.user_type,
        "points": points,
        "level": user.level,
        "points_to_next_level": points_to_next_level(points),
        "level_progress": round(progress, 1),
        "created_at": user.created_at,
        "badges": [
            {
                "id": ub.badge.id,
                "name": ub.badge.name,
                "description": ub.badge.description,
                "image_url": ub.badge.image_url,
                "earned_at": ub.earned_at,
            }
            for ub in badges
        ],
    }


def get_user_points_log(
    db: Session,
    user_id: int
    ) -> List[UserPointsLog]:
    return (
        db.query(UserPointsLog)
          .filter(UserPointsLog.user_id == user_id)
          .order_by(UserPointsLog.created_at.desc(), UserPointsLog.id.desc())
          .all()
    )


def get_leaderboard(
    db: Session,
    limit: int = 10
) -> List[User]:
    """
    Return the top `limit` users ordered by points descending.
    """
    return (
        db.query(User)
          .order_by(User.points.desc(), User.id)
          .limit(limit)
          .all()
    )
