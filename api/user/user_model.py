# api/user/user_model.py
from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from config.database import Base
import enum
from api.badges.user_badges_model import UserBadge
from api.user.user_points_model import UserPointsLog
from api.activities.activities_model import Activity


class UserRole(enum.Enum):
    USER  = 'USER'
    ADMIN = 'ADMIN'


class User(Base):
    __tablename__ = 'users'

    id         = Column(Integer, primary_key=True, index=True)
    name       = Column(String(100), nullable=False)
    email      = Column(String(255), nullable=False, unique=True, index=True)
    role       = Column(Enum(UserRole), nullable=False, default=UserRole.USER)
    user_type  = Column(String(50), nullable=False, default="INDIVIDUAL")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # gamification state, see services/points_service.py
    points     = Column(Integer, nullable=False, default=0)
    level      = Column(Integer, nullable=False, default=1)

    activities = relationship(
        Activity,
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    # link to badges this user has earned
    badges = relationship(
        UserBadge,
        back_populates="user",
        cascade="all, delete-orphan"
    )

    points_log = relationship(
        UserPointsLog,
        back_populates="user",
        cascade="all, delete-orphan"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', points={self.points}, level={self.level})>"
