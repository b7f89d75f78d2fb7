from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, Enum, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hostelhub.core.database import Base
from hostelhub.models.enums import LostFoundType, LostFoundStatus, ClaimStatus


class LostFound(Base):
    __tablename__ = "lost_found"

    id = Column(Integer, primary_key=True, index=True)

    type = Column(Enum(LostFoundType, name="lost_found_type", native_enum=False), nullable=False, index=True)
    item_name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)   # when it was lost / found
    contact_info = Column(String, nullable=True)
    image_urls = Column(JSON, nullable=False, default=list)

    status = Column(Enum(LostFoundStatus, name="lost_found_status", native_enum=False), nullable=False,
                    default=LostFoundStatus.ACTIVE, index=True)
    claim_status = Column(Enum(ClaimStatus, name="claim_status", native_enum=False), nullable=True)

    reporter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    reporter = relationship("User", foreign_keys=[reporter_id])
    claimed_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now(), nullable=False)
