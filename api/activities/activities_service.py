# api/activities/activities_service.py
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from api.activities.activities_model import Activity
from api.activities.activities_schema import ActivityCreate, ActivityResponse
from api.activities.evidence_model import Evidence
from api.badges.badges_service import BadgeEvaluation, BadgeEvaluator
from api.user.user_model import User
from api.user.user_points_model import UserPointsLog
from config.points_config import ActivityType, PointReason
from config.settings import settings
from helpers.s3_helper import S3Service, StoredFile, validate_file
from services.points_service import apply_points_accrual, calculate_activity_points
from utils.database_utils import DatabaseUtils

logger = logging.getLogger(__name__)


@dataclass
class EvidenceUpload:
    """An evidence file read from the multipart request."""
    file_name: str
    content_type: Optional[str]
    data: bytes


def validate_evidence_files(files: List[EvidenceUpload]) -> List[str]:
    errors = []
    if len(files) < settings.MIN_EVIDENCE_FILES:
        errors.append(f"evidence: at least {settings.MIN_EVIDENCE_FILES} file(s) required")
    if len(files) > settings.MAX_EVIDENCE_FILES:
        errors.append(f"evidence: no more than {settings.MAX_EVIDENCE_FILES} files allowed")
    for upload in files:
        error = validate_file(upload.file_name, upload.content_type, len(upload.data))
        if error:
            errors.append(f"evidence: {error}")
    return errors


def serialize_activity(activity: Activity, storage: S3Service) -> ActivityResponse:
    """Activity response with a display URL resolved for every evidence file."""
    response = ActivityResponse.model_validate(activity)
    for ev in response.evidence:
        ev.public_display_url = storage.get_public_url(ev.file_key)
        if ev.public_display_url is None:
            logger.warning("Could not build public URL for evidence key %s", ev.file_key)
    return response


def remove_stored_files(storage: S3Service, file_keys: List[str]) -> List[str]:
    """Best-effort removal from object storage. Returns the keys that failed."""
    failed = [key for key in file_keys if not storage.delete_file(key)]
    if failed:
        logger.warning("Orphaned evidence files left in storage: %s", failed)
    return failed


def create_activity(
    db: Session,
    user_id: int,
    data: ActivityCreate,
    files: List[EvidenceUpload],
    storage: S3Service,
    evaluator: BadgeEvaluator,
) -> Tuple[Activity, BadgeEvaluation]:
    """
    Upload the evidence, store the activity, credit its points to the user
    (level can only go up here) and run badge evaluation, all in one commit.
    """
    stored: List[StoredFile] = []
    try:
        for upload in files:
            stored.append(storage.upload_evidence(upload.data, upload.file_name, upload.content_type))
    except Exception:
        # nothing was written to the database yet
        remove_stored_files(storage, [s.file_key for s in stored])
        raise

    try:
        user = (
            db.query(User)
              .filter(User.id == user_id)
              .with_for_update()
              .one()
        )
        points = calculate_activity_points(data.type, data.quantity)
        activity = Activity(
            id=uuid.uuid4(),
            user_id=user.id,
            title=data.title,
            description=data.description,
            type=data.type,
            quantity=data.quantity,
            unit=data.unit,
            points=points,
            date=data.date,
            evidence=[
                Evidence(
                    file_key=s.file_key,
                    file_type=s.file_type,
                    file_name=s.file_name,
                    file_size=s.file_size,
                    format=s.format,
                )
                for s in stored
            ],
        )
        db.add(activity)

        level_up = apply_points_accrual(user, points)
        if points:
            db.add(UserPointsLog(
                user_id=user.id,
                delta=points,
                reason=PointReason.activity_submitted.value,
                activity_id=str(activity.id),
            ))
        db.flush()

        evaluation = evaluator.evaluate(db, user.id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create activity for user %s", user_id)
        remove_stored_files(storage, [s.file_key for s in stored])
        raise

    db.refresh(activity)
    logger.info(
        "Activity %s created for user %s: +%s points%s",
        activity.id, user_id, points, " (level up)" if level_up else ""
    )
    return activity, evaluation


def _activity_query(db: Session):
    return db.query(Activity).options(
        joinedload(Activity.user),
        selectinload(Activity.evidence),
    )


def list_activities(
    db: Session,
    current_user: Dict[str, Any],
    is_admin: bool,
    user_id: Optional[int] = None,
    activity_type: Optional[ActivityType] = None,
    page: int = 1,
    limit: int = 10,
) -> Dict[str, Any]:
    """
    Users only ever see their own activities. Admins see a given user's,
    or everyone's when `user_id` is omitted.
    """
    query = _activity_query(db)
    if not is_admin:
        query = query.filter(Activity.user_id == current_user["id"])
    elif user_id is not None:
        query = query.filter(Activity.user_id == user_id)
    if activity_type is not None:
        query = query.filter(Activity.type == activity_type)

    query = query.order_by(Activity.created_at.desc(), Activity.id)
    return DatabaseUtils.paginate_query(query, page=page, limit=limit)


def get_activity(
    db: Session,
    activity_id: UUID,
    current_user: Dict[str, Any],
    is_admin: bool,
) -> Activity:
    activity = _activity_query(db).filter(Activity.id == activity_id).first()
    if not activity:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")
    if not is_admin and activity.user_id != current_user["id"]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to view this activity")
    return activity
