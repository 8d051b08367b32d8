# api/activities/activities_model.py
import enum
import uuid
from sqlalchemy import Column, Integer, String, Text, Float, DateTime, Enum, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
from config.database import Base
from config.points_config import ActivityType
from api.activities.evidence_model import Evidence


class ActivityStatus(enum.Enum):
    PENDING_REVIEW = 'PENDING_REVIEW'
    REVIEWED       = 'REVIEWED'


class Activity(Base):
    __tablename__ = "activities"

    id          = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id     = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title       = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    type        = Column(Enum(ActivityType), nullable=False, index=True)
    quantity    = Column(Float, nullable=False)
    unit        = Column(String(30), nullable=False)
    points      = Column(Integer, nullable=False, default=0)
    date        = Column(DateTime(timezone=True), nullable=False)
    status      = Column(Enum(ActivityStatus), nullable=False, default=ActivityStatus.PENDING_REVIEW)
    created_at  = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at  = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="activities")

    evidence = relationship(
        Evidence,
        back_populates="activity",
        cascade="all, delete-orphan",
        order_by=Evidence.created_at
    )

    def __repr__(self):
        return f"<Activity(id={self.id}, type={self.type}, quantity={self.quantity}, points={self.points})>"
