from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, Enum, JSON
from sqlalchemy.orm import relationship
from hostelhub.core.database import Base
from hostelhub.models.enums import AnnouncementType


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    type = Column(Enum(AnnouncementType, name="announcement_type", native_enum=False), nullable=False, index=True)

    # Audience filters; an empty list means everyone along that dimension
    target_hostels = Column(JSON, nullable=False, default=list)
    target_blocks = Column(JSON, nullable=False, default=list)
    target_roles = Column(JSON, nullable=False, default=list)

    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    author = relationship("User")

    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
