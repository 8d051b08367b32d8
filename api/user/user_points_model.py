from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from config.database import Base

class UserPointsLog(Base):
    __tablename__ = "user_points_log"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    user_id     = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    delta       = Column(Integer, nullable=False)
    reason      = Column(String(100), nullable=False)
    # activity rows can be deleted, so keep a plain reference
    activity_id = Column(String(36), nullable=True)
    created_at  = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="points_log")

    def __repr__(self):
        return f"<UserPointsLog(user_id={self.user_id}, delta={self.delta}, reason='{self.reason}')>"
