from pydantic import BaseModel, Field


class PlatformStats(BaseModel):
    total_users: int = Field(..., ge=0)
    total_activities: int = Field(..., ge=0)
