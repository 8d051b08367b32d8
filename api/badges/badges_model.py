# badges_model.py
from sqlalchemy import Column, String, Text, DateTime, func
from sqlalchemy.orm import relationship
from config.database import Base
from config.badges_config import BadgeDefinition

class Badge(Base):
    __tablename__ = "badges"

    # catalog identifier, e.g. FIRST_ACTIVITY_BADGE
    id = Column(String(64), primary_key=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(512), nullable=False)
    criteria = Column(String(128), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user_badges = relationship(
        "UserBadge",
        back_populates="badge",
        cascade="all, delete-orphan"
    )

    @classmethod
    def from_definition(cls, definition: BadgeDefinition) -> "Badge":
        return cls(
            id=definition.id,
            name=definition.name,
            description=definition.description,
            image_url=definition.image_url,
            criteria=definition.criteria,
        )

    def __repr__(self):
        return f"<Badge(id='{self.id}', name='{self.name}')>"
