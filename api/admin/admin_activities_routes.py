from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.activities.activities_schema import ActivityListResponse
from api.admin.admin_activities_controller import (
    delete_activity_controller,
    list_admin_activities_controller,
    update_activity_controller,
)
from api.admin.admin_activities_schema import AdminActivityResponse, AdminActivityUpdate, Message
from api.badges.badges_service import BadgeEvaluator, get_badge_evaluator
from config.database import get_db
from helpers.s3_helper import S3Service, get_storage
from middlewares.role_middleware import admin_required

# role check runs before any handler touches the database
router = APIRouter(
    prefix="/admin/activities",
    tags=["Admin"],
    dependencies=[Depends(admin_required)]
)


@router.get(
    "",
    response_model=ActivityListResponse,
    summary="List all activities for review"
)
def get_admin_activities(
    search: Optional[str] = Query(None, description="Match on owner name or email"),
    user_type: Optional[str] = Query(None, alias="userType"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    storage: S3Service = Depends(get_storage),
):
    return list_admin_activities_controller(db, storage, search, user_type, page, limit)


@router.put(
    "/{activity_id}",
    response_model=AdminActivityResponse,
    summary="Edit an activity and reconcile the owner's points"
)
def put_admin_activity(
    activity_id: UUID,
    changes: AdminActivityUpdate,
    db: Session = Depends(get_db),
    storage: S3Service = Depends(get_storage),
    evaluator: BadgeEvaluator = Depends(get_badge_evaluator),
):
    return update_activity_controller(activity_id, changes, db, storage, evaluator)


@router.delete(
    "/{activity_id}",
    response_model=Message,
    summary="Delete an activity and its evidence, reversing its points"
)
def delete_admin_activity(
    activity_id: UUID,
    db: Session = Depends(get_db),
    storage: S3Service = Depends(get_storage),
    evaluator: BadgeEvaluator = Depends(get_badge_evaluator),
):
    return delete_activity_controller(activity_id, db, storage, evaluator)
