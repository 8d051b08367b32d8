import logging
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from config.database import Base, engine as default_engine, SessionLocal
from config.badges_config import ALL_BADGES

# register every mapped class on Base.metadata
from api.activities.evidence_model import Evidence  # noqa: F401
from api.activities.activities_model import Activity  # noqa: F401
from api.badges.badges_model import Badge  # noqa: F401
from api.badges.user_badges_model import UserBadge  # noqa: F401
from api.user.user_points_model import UserPointsLog  # noqa: F401
from api.user.user_model import User  # noqa: F401
from api.badges.badges_service import BadgeService

logger = logging.getLogger(__name__)


def init_db(bind: Engine = default_engine):
    Base.metadata.create_all(bind=bind)


def seed_badges(db: Session, catalog=ALL_BADGES) -> int:
    created = BadgeService(db).seed_badges(catalog)
    logger.info("Badge catalog checked, %s badge(s) created", created)
    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    with SessionLocal() as db:
        seed_badges(db)
    print("✅ Database initialized!")
