# api/activities/activities_controller.py
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from api.activities.activities_schema import (
    ActivityCreate,
    ActivityCreateResponse,
    ActivityListResponse,
    ActivityResponse,
)
from api.activities.activities_service import (
    EvidenceUpload,
    create_activity,
    get_activity,
    list_activities,
    serialize_activity,
    validate_evidence_files,
)
from api.badges.badges_service import BadgeEvaluator
from config.points_config import ActivityType
from helpers.s3_helper import S3Service
from middlewares.role_middleware import is_admin


def format_validation_errors(e: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
        for err in e.errors()
    ]


def create_activity_controller(
    form: Dict[str, Optional[str]],
    files: List[EvidenceUpload],
    db: Session,
    storage: S3Service,
    evaluator: BadgeEvaluator,
    current_user: dict,
) -> ActivityCreateResponse:
    """
    Validate the submission (fields and evidence together, so the caller sees
    every problem at once) and record it.
    """
    errors: List[str] = []
    data = None
    try:
        data = ActivityCreate(**{k: v for k, v in form.items() if v is not None})
    except ValidationError as e:
        errors.extend(format_validation_errors(e))
    errors.extend(validate_evidence_files(files))

    if errors:
        raise HTTPException(
            status_code=422,
            detail={"message": "Validation Error", "errors": errors}
        )

    activity, evaluation = create_activity(db, current_user["id"], data, files, storage, evaluator)
    response = serialize_activity(activity, storage)
    return ActivityCreateResponse(**response.model_dump(), badges_granted=evaluation.granted)


def list_activities_controller(
    db: Session,
    storage: S3Service,
    current_user: dict,
    user_id: Optional[int],
    activity_type: Optional[ActivityType],
    page: int,
    limit: int,
) -> ActivityListResponse:
    result: Dict[str, Any] = list_activities(
        db,
        current_user,
        is_admin(current_user),
        user_id=user_id,
        activity_type=activity_type,
        page=page,
        limit=limit,
    )
    return ActivityListResponse(
        activities=[serialize_activity(a, storage) for a in result["items"]],
        pagination=result["pagination"],
    )


def get_activity_controller(
    activity_id: UUID,
    db: Session,
    storage: S3Service,
    current_user: dict,
) -> ActivityResponse:
    activity = get_activity(db, activity_id, current_user, is_admin(current_user))
    return serialize_activity(activity, storage)
