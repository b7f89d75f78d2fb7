from sqlalchemy import Column, String, DateTime, Integer, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hostelhub.core.database import Base
from hostelhub.models.enums import Role


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(Role, name="user_role", native_enum=False), nullable=False)  # fixed at registration

    # Student residence; copied onto issues at report time
    hostel = Column(String, nullable=True)
    block = Column(String, nullable=True)
    room = Column(String, nullable=True)

    issues = relationship("Issue", back_populates="reporter")
    comments = relationship("Comment", back_populates="user")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
