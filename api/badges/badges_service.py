import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from fastapi import Depends
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from api.activities.activities_model import Activity
from api.badges.badges_model import Badge
from api.badges.user_badges_model import UserBadge
from api.user.user_model import User
from config.badges_config import ALL_BADGES, BadgeCriteria, BadgeDefinition, get_badge_catalog
from config.points_config import ActivityType

logger = logging.getLogger(__name__)


class BadgeService:
    def __init__(self, db: Session):
        self.db = db

    def list_badges(self) -> List[Badge]:
        return self.db.query(Badge).order_by(Badge.created_at, Badge.id).all()

    def get_badge(self, badge_id: str) -> Optional[Badge]:
        return self.db.query(Badge).filter(Badge.id == badge_id).first()

    def list_user_badges(self, user_id: int) -> List[UserBadge]:
        return (
            self.db.query(UserBadge)
              .options(joinedload(UserBadge.badge))
              .filter(UserBadge.user_id == user_id)
              .order_by(UserBadge.earned_at.desc())
              .all()
        )

    def seed_badges(self, catalog: Sequence[BadgeDefinition] = ALL_BADGES) -> int:
        """
        Make sure every catalog entry has a row in `badges`.
        Existing rows are refreshed from the definition. Returns the number created.
        """
        created = 0
        for definition in catalog:
            badge = self.get_badge(definition.id)
            if badge is None:
                self.db.add(Badge.from_definition(definition))
                created += 1
                logger.info("Badge %s created", definition.id)
            else:
                badge.name = definition.name
                badge.description = definition.description
                badge.image_url = definition.image_url
                badge.criteria = definition.criteria
        self.db.commit()
        return created


def user_has_badge(db: Session, user_id: int, badge_id: str) -> bool:
    return (
        db.query(UserBadge)
          .filter_by(user_id=user_id, badge_id=badge_id)
          .first()
          is not None
    )


@dataclass
class UserAggregate:
    """Snapshot of everything a badge rule can look at."""
    user_id: int
    activity_count: int
    level: int
    points: int
    quantity_by_type: Dict[ActivityType, float] = field(default_factory=dict)
    held_badges: Set[str] = field(default_factory=set)


@dataclass
class BadgeEvaluation:
    user_id: int
    granted: List[str] = field(default_factory=list)
    # non-fatal problems: broken catalog entries, failed grants
    warnings: List[str] = field(default_factory=list)


class BadgeEvaluator:
    """
    Checks a badge catalog against a user's current totals and grants
    whatever they newly qualify for.

    Runs inside the caller's transaction. The caller must flush its own
    changes first; grants go through a SAVEPOINT so a failure here never
    takes the caller's work down with it.
    """

    def __init__(self, catalog: Sequence[BadgeDefinition] = ALL_BADGES):
        self.catalog = tuple(catalog)

    def load_aggregate(self, db: Session, user_id: int) -> Optional[UserAggregate]:
        user = db.get(User, user_id)
        if user is None:
            return None

        activity_count = (
            db.query(func.count(Activity.id))
              .filter(Activity.user_id == user_id)
              .scalar()
        ) or 0
        sums = (
            db.query(Activity.type, func.coalesce(func.sum(Activity.quantity), 0))
              .filter(Activity.user_id == user_id)
              .group_by(Activity.type)
              .all()
        )
        held = db.query(UserBadge.badge_id).filter(UserBadge.user_id == user_id).all()

        return UserAggregate(
            user_id=user_id,
            activity_count=activity_count,
            level=user.level,
            points=user.points,
            quantity_by_type={activity_type: float(total) for activity_type, total in sums},
            held_badges={badge_id for (badge_id,) in held},
        )

    @staticmethod
    def criteria_met(badge: BadgeDefinition, aggregate: UserAggregate) -> bool:
        threshold = badge.criteria_threshold
        criteria = BadgeCriteria(badge.criteria_type)

        if criteria == BadgeCriteria.ACTIVITY_COUNT:
            return aggregate.activity_count >= threshold
        if criteria == BadgeCriteria.USER_LEVEL:
            return aggregate.level >= threshold
        if criteria == BadgeCriteria.TOTAL_POINTS:
            return aggregate.points >= threshold
        if criteria == BadgeCriteria.SPECIFIC_ACTIVITY_TYPE_COUNT:
            if badge.criteria_activity_type is None:
                raise ValueError(f"badge {badge.id} has no target activity type")
            target = ActivityType(badge.criteria_activity_type)
            return aggregate.quantity_by_type.get(target, 0) >= threshold
        raise ValueError(f"unsupported criteria type {criteria}")

    def evaluate(self, db: Session, user_id: int) -> BadgeEvaluation:
        result = BadgeEvaluation(user_id=user_id)
        try:
            # a failed aggregate query must not abort the caller's transaction
            with db.begin_nested():
                aggregate = self.load_aggregate(db, user_id)
        except SQLAlchemyError as e:
            logger.exception("Could not load badge state for user %s", user_id)
            result.warnings.append(f"aggregate: {e}")
            return result
        if aggregate is None:
            return result

        to_award: List[BadgeDefinition] = []
        for badge in self.catalog:
            if badge.id in aggregate.held_badges:
                continue
            try:
                if self.criteria_met(badge, aggregate):
                    to_award.append(badge)
            except (ValueError, TypeError, AttributeError) as e:
                logger.error("Skipping badge %s for user %s: %s", getattr(badge, "id", badge), user_id, e)
                result.warnings.append(f"{getattr(badge, 'id', badge)}: {e}")

        if to_award:
            self._grant(db, user_id, to_award, result)
        return result

    def _grant(
        self,
        db: Session,
        user_id: int,
        badges: List[BadgeDefinition],
        result: BadgeEvaluation,
    ) -> None:
        try:
            with db.begin_nested():
                for badge in badges:
                    if db.get(Badge, badge.id) is None:
                        db.add(Badge.from_definition(badge))
                    db.add(UserBadge(user_id=user_id, badge_id=badge.id))
        except SQLAlchemyError as e:
            logger.exception("Error granting badges to user %s", user_id)
            result.warnings.append(f"grant: {e}")
            return

        result.granted.extend(badge.id for badge in badges)
        logger.info("User %s earned badges: %s", user_id, ", ".join(result.granted))


def get_badge_evaluator(
    catalog: Sequence[BadgeDefinition] = Depends(get_badge_catalog)
) -> BadgeEvaluator:
    """FastAPI dependency; override `get_badge_catalog` to swap the catalog."""
    return BadgeEvaluator(catalog)
