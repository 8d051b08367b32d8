from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from config.points_config import ActivityType
from api.activities.activities_model import ActivityStatus
from api.activities.activities_schema import ActivityResponse


class AdminActivityUpdate(BaseModel):
    """Any subset of the editable fields; omitted fields are left untouched."""
    title: Optional[str] = Field(None, min_length=10, max_length=100)
    # "" clears the description
    description: Optional[str] = Field(None, max_length=100)
    type: Optional[ActivityType] = None
    quantity: Optional[float] = Field(None, ge=1, le=20)
    unit: Optional[str] = Field(None, min_length=1, max_length=30)
    date: Optional[datetime] = None
    status: Optional[ActivityStatus] = None
    evidences_to_delete: List[UUID] = Field(
        default_factory=list,
        validation_alias=AliasChoices("evidences_to_delete", "evidencesToDelete"),
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        if v is None or v == "":
            return v
        if len(v) < 10:
            raise ValueError("Description must be at least 10 characters long")
        return v


class AdminActivityResponse(ActivityResponse):
    points_difference: int = 0
    badges_granted: List[str] = []


class Message(BaseModel):
    message: str
