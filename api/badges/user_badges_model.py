# user_badges_model.py
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from config.database import Base
from api.badges.badges_model import Badge


class UserBadge(Base):
    """A badge a user holds. Grants are permanent; nothing revokes them."""
    __tablename__ = "user_badges"

    # composite key: a badge is held at most once
    user_id   = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    badge_id  = Column(String(64), ForeignKey("badges.id", ondelete="CASCADE"), primary_key=True)
    earned_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user  = relationship("User", back_populates="badges")
    badge = relationship(Badge, back_populates="user_badges", lazy="joined")

    def __repr__(self):
        return f"<UserBadge {self.user_id}:{self.badge_id}>"
