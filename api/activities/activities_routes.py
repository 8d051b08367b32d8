from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from api.activities.activities_controller import (
    create_activity_controller,
    get_activity_controller,
    list_activities_controller,
)
from api.activities.activities_schema import (
    ActivityCreateResponse,
    ActivityListResponse,
    ActivityResponse,
)
from api.activities.activities_service import EvidenceUpload
from api.badges.badges_service import BadgeEvaluator, get_badge_evaluator
from config.database import get_db
from config.points_config import ActivityType
from helpers.s3_helper import S3Service, get_storage
from middlewares.auth_middleware import auth_middleware

router = APIRouter(prefix="/activities", tags=["Activities"])


@router.post(
    "",
    response_model=ActivityCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit an ecological activity with evidence files"
)
async def post_activity(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    activity_type: Optional[str] = Form(None, alias="type"),
    quantity: Optional[str] = Form(None),
    unit: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    evidence: List[UploadFile] = File(default=[]),
    db: Session = Depends(get_db),
    storage: S3Service = Depends(get_storage),
    evaluator: BadgeEvaluator = Depends(get_badge_evaluator),
    current_user: dict = Depends(auth_middleware),
):
    files = [
        EvidenceUpload(file_name=f.filename or "", content_type=f.content_type, data=await f.read())
        for f in evidence
    ]
    form = {
        "title": title,
        "description": description,
        "type": activity_type,
        "quantity": quantity,
        "unit": unit,
        "date": date,
    }
    return create_activity_controller(form, files, db, storage, evaluator, current_user)


@router.get(
    "",
    response_model=ActivityListResponse,
    summary="List activities (own activities unless admin)"
)
def get_activities(
    activity_type: Optional[ActivityType] = Query(None, alias="type"),
    user_id: Optional[int] = Query(None, description="Admins only"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    storage: S3Service = Depends(get_storage),
    current_user: dict = Depends(auth_middleware),
):
    return list_activities_controller(db, storage, current_user, user_id, activity_type, page, limit)


@router.get(
    "/{activity_id}",
    response_model=ActivityResponse,
    summary="Get a single activity"
)
def get_single_activity(
    activity_id: UUID,
    db: Session = Depends(get_db),
    storage: S3Service = Depends(get_storage),
    current_user: dict = Depends(auth_middleware),
):
    return get_activity_controller(activity_id, db, storage, current_user)
