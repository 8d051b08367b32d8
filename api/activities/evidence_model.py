import uuid
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
from config.database import Base


class Evidence(Base):
    __tablename__ = "evidence"

    id          = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    activity_id = Column(Uuid(as_uuid=True), ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True)
    file_key    = Column(String(512), nullable=False)   # object storage key, not a URL
    file_type   = Column(String(20), nullable=False)    # image | video | other
    file_name   = Column(String(255), nullable=False)
    file_size   = Column(Integer, nullable=False)
    format      = Column(String(20), nullable=True)
    created_at  = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    activity = relationship("Activity", back_populates="evidence")

    def __repr__(self):
        return f"<Evidence(id={self.id}, file_key='{self.file_key}')>"
