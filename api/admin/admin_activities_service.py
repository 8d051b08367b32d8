# api/admin/admin_activities_service.py
"""
Admin corrections to activities after submission.

Every change that touches an activity's points is reconciled against the
owner's total in the same transaction: the activity mutation, evidence row
removal, user points/level and any badge grants commit together or not at
all. Object storage cleanup happens after the commit and is best-effort.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from api.activities.activities_model import Activity
from api.activities.activities_service import remove_stored_files
from api.admin.admin_activities_schema import AdminActivityUpdate
from api.badges.badges_service import BadgeEvaluator
from api.user.user_model import User
from api.user.user_points_model import UserPointsLog
from config.points_config import PointReason
from config.settings import settings
from helpers.s3_helper import S3Service
from services.points_service import apply_points_correction, calculate_activity_points
from utils.database_utils import DatabaseUtils

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "type", "quantity", "unit", "date", "status")


@dataclass
class CorrectionResult:
    activity: Optional[Activity]
    user_id: int
    points_difference: int
    badges_granted: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    orphaned_files: List[str] = field(default_factory=list)


def _lock_user(db: Session, user_id: int) -> Optional[User]:
    # FOR UPDATE serializes concurrent corrections on PostgreSQL; SQLite ignores it
    return (
        db.query(User)
          .filter(User.id == user_id)
          .with_for_update()
          .one_or_none()
    )


def _reconcile_user(
    db: Session,
    user_id: int,
    difference: int,
    reason: PointReason,
    activity_id: UUID,
) -> None:
    user = _lock_user(db, user_id)
    if user is None:
        logger.warning("Owner %s of activity %s no longer exists", user_id, activity_id)
        return
    before = (user.points, user.level)
    apply_points_correction(user, difference)
    if difference:
        db.add(UserPointsLog(
            user_id=user_id,
            delta=difference,
            reason=reason.value,
            activity_id=str(activity_id),
        ))
    logger.info(
        "User %s points %s -> %s, level %s -> %s",
        user_id, before[0], user.points, before[1], user.level
    )


def update_activity_as_admin(
    db: Session,
    activity_id: UUID,
    changes: AdminActivityUpdate,
    storage: S3Service,
    evaluator: BadgeEvaluator,
) -> CorrectionResult:
    activity = DatabaseUtils.get_by_id_or_404(db, Activity, activity_id)

    # snapshot before anything is mutated
    original_points = activity.points
    owner_id = activity.user_id

    fields = {
        name: value
        for name, value in changes.model_dump(include=set(EDITABLE_FIELDS), exclude_unset=True).items()
        if value is not None or name == "description"
    }
    if fields.get("description") == "":
        fields["description"] = None

    doomed = []
    if changes.evidences_to_delete:
        wanted = set(changes.evidences_to_delete)
        # only evidence that belongs to this activity
        doomed = [ev for ev in activity.evidence if ev.id in wanted]
        remaining = len(activity.evidence) - len(doomed)
        if remaining < settings.MIN_EVIDENCE_FILES:
            raise HTTPException(
                status_code=422,
                detail={
                    "message": "Validation Error",
                    "errors": [f"evidences_to_delete: an activity must keep at least {settings.MIN_EVIDENCE_FILES} evidence file(s)"],
                },
            )

    new_points = original_points
    if "type" in fields or "quantity" in fields:
        new_points = calculate_activity_points(
            fields.get("type", activity.type),
            fields.get("quantity", activity.quantity),
        )
    difference = new_points - original_points
    doomed_keys = [ev.file_key for ev in doomed]

    try:
        for ev in doomed:
            activity.evidence.remove(ev)
        for name, value in fields.items():
            setattr(activity, name, value)
        activity.points = new_points

        _reconcile_user(db, owner_id, difference, PointReason.activity_corrected, activity.id)
        db.flush()

        evaluation = evaluator.evaluate(db, owner_id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Admin update of activity %s failed; nothing was applied", activity_id)
        raise

    orphaned = remove_stored_files(storage, doomed_keys)
    db.refresh(activity)
    logger.info(
        "Activity %s updated by admin: points %s -> %s (%+d)",
        activity_id, original_points, new_points, difference
    )
    return CorrectionResult(
        activity=activity,
        user_id=owner_id,
        points_difference=difference,
        badges_granted=evaluation.granted,
        warnings=evaluation.warnings,
        orphaned_files=orphaned,
    )


def delete_activity_as_admin(
    db: Session,
    activity_id: UUID,
    storage: S3Service,
    evaluator: BadgeEvaluator,
) -> CorrectionResult:
    activity = DatabaseUtils.get_by_id_or_404(db, Activity, activity_id)

    original_points = activity.points
    owner_id = activity.user_id
    file_keys = [ev.file_key for ev in activity.evidence]
    difference = -original_points

    try:
        db.delete(activity)
        _reconcile_user(db, owner_id, difference, PointReason.activity_deleted, activity_id)
        db.flush()

        # badges are never revoked; this can still grant, e.g. if a catalog entry was added
        evaluation = evaluator.evaluate(db, owner_id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Admin delete of activity %s failed; nothing was applied", activity_id)
        raise

    orphaned = remove_stored_files(storage, file_keys)
    logger.info("Activity %s deleted by admin (%+d points for user %s)", activity_id, difference, owner_id)
    return CorrectionResult(
        activity=None,
        user_id=owner_id,
        points_difference=difference,
        badges_granted=evaluation.granted,
        warnings=evaluation.warnings,
        orphaned_files=orphaned,
    )


def list_activities_for_admin(
    db: Session,
    search: Optional[str] = None,
    user_type: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Dict[str, Any]:
    """All activities, newest first, filterable by owner name/email and user type."""
    query = (
        db.query(Activity)
          .join(User, Activity.user_id == User.id)
          .options(joinedload(Activity.user), selectinload(Activity.evidence))
    )
    if search:
        term = f"%{search}%"
        query = query.filter(or_(User.name.ilike(term), User.email.ilike(term)))
    if user_type and user_type != "all":
        query = query.filter(User.user_type == user_type)

    query = query.order_by(Activity.created_at.desc(), Activity.id)
    return DatabaseUtils.paginate_query(query, page=page, limit=limit)
