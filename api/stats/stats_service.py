from sqlalchemy.orm import Session

from api.activities.activities_model import Activity
from api.user.user_model import User


def get_platform_stats(db: Session) -> dict:
    """Platform-wide totals for the public landing page."""
    return {
        "total_users": db.query(User).count(),
        "total_activities": db.query(Activity).count(),
    }
