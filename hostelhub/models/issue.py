from sqlalchemy import Column, String, Text, DateTime, Integer, ForeignKey, Enum, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hostelhub.core.database import Base
from hostelhub.models.enums import IssueCategory, IssuePriority, IssueStatus, Visibility, ReactionType


class Issue(Base):
    __tablename__ = "issues"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(Enum(IssueCategory, name="issue_category", native_enum=False), nullable=False, index=True)
    priority = Column(Enum(IssuePriority, name="issue_priority", native_enum=False), nullable=False, index=True)
    status = Column(Enum(IssueStatus, name="issue_status", native_enum=False), nullable=False,
                    default=IssueStatus.REPORTED, index=True)
    visibility = Column(Enum(Visibility, name="issue_visibility", native_enum=False), nullable=False,
                        default=Visibility.PUBLIC)

    # Snapshot of the reporter's residence at report time, never re-derived
    hostel = Column(String, nullable=False, index=True)
    block = Column(String, nullable=False)
    room = Column(String, nullable=False)

    reporter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    reporter = relationship("User", back_populates="issues")
    assigned_to = Column(String, nullable=True)       # staff name or team, free text

    media_urls = Column(JSON, nullable=False, default=list)

    # Lifecycle stamps, each written once on first entry into its status
    reported_at = Column(DateTime(timezone=True), nullable=False, index=True)
    assigned_at = Column(DateTime(timezone=True), nullable=True)
    in_progress_at = Column(DateTime(timezone=True), nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    closed_at = Column(DateTime(timezone=True), nullable=True)

    comments = relationship("Comment", back_populates="issue", order_by="Comment.created_at")
    reactions = relationship("Reaction", back_populates="issue")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now(), nullable=False)


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)

    issue_id = Column(Integer, ForeignKey("issues.id"), nullable=False, index=True)
    issue = relationship("Issue", back_populates="comments")
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    user = relationship("User", back_populates="comments")

    content = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, index=True)


class Reaction(Base):
    __tablename__ = "reactions"
    __table_args__ = (
        # one reaction per user per issue, whatever its type
        UniqueConstraint("issue_id", "user_id", name="uq_reactions_issue_user"),
    )

    id = Column(Integer, primary_key=True, index=True)

    issue_id = Column(Integer, ForeignKey("issues.id"), nullable=False, index=True)
    issue = relationship("Issue", back_populates="reactions")
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    type = Column(Enum(ReactionType, name="reaction_type", native_enum=False), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
