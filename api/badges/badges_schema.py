from pydantic import BaseModel, ConfigDict
from datetime import datetime

class BadgeBase(BaseModel):
    id: str
    name: str
    description: str
    image_url: str

class BadgeRead(BadgeBase):
    criteria: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class UserBadgeRead(BaseModel):
    badge: BadgeRead
    earned_at: datetime

    model_config = ConfigDict(from_attributes=True)
