from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
from api.user.user_model import UserRole
from api.badges.badges_schema import BadgeBase

class ProfileBadge(BadgeBase):
    earned_at: datetime

class UserProfileResponse(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    user_type: str
    points: int = Field(..., ge=0)
    level: int = Field(..., ge=1)
    points_to_next_level: int
    level_progress: float = Field(..., description="Percent of the current level completed")
    created_at: datetime
    badges: List[ProfileBadge] = []

class LeaderboardEntry(BaseModel):
    id: int
    name: str
    points: int
    level: int

    model_config = ConfigDict(from_attributes=True)

class PointsLogEntry(BaseModel):
    delta: int
    reason: str
    activity_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
