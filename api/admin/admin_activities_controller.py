# api/admin/admin_activities_controller.py
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from api.activities.activities_schema import ActivityListResponse
from api.activities.activities_service import serialize_activity
from api.admin.admin_activities_schema import AdminActivityResponse, AdminActivityUpdate
from api.admin.admin_activities_service import (
    delete_activity_as_admin,
    list_activities_for_admin,
    update_activity_as_admin,
)
from api.badges.badges_service import BadgeEvaluator
from helpers.s3_helper import S3Service


def list_admin_activities_controller(
    db: Session,
    storage: S3Service,
    search: Optional[str],
    user_type: Optional[str],
    page: int,
    limit: int,
) -> ActivityListResponse:
    result = list_activities_for_admin(db, search=search, user_type=user_type, page=page, limit=limit)
    return ActivityListResponse(
        activities=[serialize_activity(a, storage) for a in result["items"]],
        pagination=result["pagination"],
    )


def update_activity_controller(
    activity_id: UUID,
    changes: AdminActivityUpdate,
    db: Session,
    storage: S3Service,
    evaluator: BadgeEvaluator,
) -> AdminActivityResponse:
    result = update_activity_as_admin(db, activity_id, changes, storage, evaluator)
    response = serialize_activity(result.activity, storage)
    return AdminActivityResponse(
        **response.model_dump(),
        points_difference=result.points_difference,
        badges_granted=result.badges_granted,
    )


def delete_activity_controller(
    activity_id: UUID,
    db: Session,
    storage: S3Service,
    evaluator: BadgeEvaluator,
) -> dict:
    delete_activity_as_admin(db, activity_id, storage, evaluator)
    return {"message": "Activity deleted and user points updated."}
