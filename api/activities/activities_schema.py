from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from config.points_config import ActivityType
from api.activities.activities_model import ActivityStatus

# ----- Request Schemas -----
class ActivityCreate(BaseModel):
    """
    Fields of the multipart activity submission (files are validated separately).
    """
    title: str = Field(..., min_length=10, max_length=100)
    description: str = Field(..., min_length=10, max_length=100)
    type: ActivityType
    quantity: float = Field(..., ge=1, le=20, description="Positive amount, 1 to 20 units")
    unit: str = Field(..., min_length=1, max_length=30)
    date: datetime

# ----- Response Schemas -----
class EvidenceResponse(BaseModel):
    id: UUID
    file_key: str
    file_type: str
    file_name: str
    file_size: int
    format: Optional[str] = None
    public_display_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class ActivityUser(BaseModel):
    id: int
    name: str
    email: str
    user_type: str

    model_config = ConfigDict(from_attributes=True)

class ActivityResponse(BaseModel):
    id: UUID
    user_id: int
    title: str
    description: Optional[str] = None
    type: ActivityType
    quantity: float
    unit: str
    points: int
    date: datetime
    status: ActivityStatus
    created_at: datetime
    user: Optional[ActivityUser] = None
    evidence: List[EvidenceResponse] = []

    model_config = ConfigDict(from_attributes=True)

class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int

class ActivityListResponse(BaseModel):
    activities: List[ActivityResponse]
    pagination: Pagination

class ActivityCreateResponse(ActivityResponse):
    badges_granted: List[str] = []
