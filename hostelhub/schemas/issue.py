from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Dict, List, Optional

from hostelhub.models.enums import (
    IssueCategory, IssuePriority, IssueStatus, Visibility, ReactionType,
    PRIORITY_ALIASES, CATEGORY_ALIASES,
)


def normalize_priority(v):
    """Fold legacy labels (URGENT) into the canonical priority."""
    if isinstance(v, str):
        v = v.strip().upper()
        return PRIORITY_ALIASES.get(v, v)
    return v


def normalize_category(v):
    """Fold legacy labels (CARPENTRY, CLEANING) into the canonical category."""
    if isinstance(v, str):
        v = v.strip().upper()
        return CATEGORY_ALIASES.get(v, v)
    return v


class IssueCreate(BaseModel):
    title: str = Field(..., min_length=5)
    description: str = Field(..., min_length=10)
    category: IssueCategory
    priority: IssuePriority
    visibility: Visibility = Visibility.PUBLIC
    media_urls: List[str] = []

    @field_validator('title', 'description', mode='before')
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('priority', mode='before')
    @classmethod
    def migrate_priority(cls, v):
        return normalize_priority(v)

    @field_validator('category', mode='before')
    @classmethod
    def migrate_category(cls, v):
        return normalize_category(v)


class IssueUpdate(BaseModel):
    """Management-side transition: new status and/or assignee."""
    status: Optional[IssueStatus] = None
    assigned_to: Optional[str] = None


class IssueFilters(BaseModel):
    category: Optional[IssueCategory] = None
    priority: Optional[IssuePriority] = None
    status: Optional[IssueStatus] = None

    @field_validator('priority', mode='before')
    @classmethod
    def migrate_priority(cls, v):
        return normalize_priority(v)

    @field_validator('category', mode='before')
    @classmethod
    def migrate_category(cls, v):
        return normalize_category(v)


class EmergencyCreate(BaseModel):
    type: str = Field(..., min_length=1, max_length=100)   # e.g. FIRE, MEDICAL
    location: str = Field(..., min_length=1, max_length=200)


class ReactionCreate(BaseModel):
    type: ReactionType


class ReactionResult(BaseModel):
    result: str   # added / removed / updated
    type: Optional[ReactionType] = None


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)

    @field_validator('content', mode='before')
    @classmethod
    def strip_content(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class CommentOut(BaseModel):
    id: int
    issue_id: int
    user_id: int
    content: str
    created_at: datetime

    class Config:
        from_attributes = True


class SlaOut(BaseModel):
    sla_hours: int
    elapsed_hours: float
    urgency: str          # normal / warning / critical
    breached: bool


class IssueOut(BaseModel):
    id: int
    title: str
    description: str
    category: IssueCategory
    priority: IssuePriority
    status: IssueStatus
    visibility: Visibility
    hostel: str
    block: str
    room: str
    reporter_id: int
    assigned_to: Optional[str]
    media_urls: List[str]
    reported_at: datetime
    assigned_at: Optional[datetime]
    in_progress_at: Optional[datetime]
    resolved_at: Optional[datetime]
    closed_at: Optional[datetime]

    class Config:
        from_attributes = True


class IssueListItem(IssueOut):
    comment_count: int = 0
    reaction_count: int = 0


class IssueDetailOut(IssueOut):
    comments: List[CommentOut] = []
    reaction_counts: Dict[str, int] = {}
    my_reaction: Optional[ReactionType] = None
    sla: Optional[SlaOut] = None


class EmergencyOut(BaseModel):
    message: str
    issue_id: int


class CategorySuggestion(BaseModel):
    category: IssueCategory
    priority: IssuePriority
    confidence: int
    candidates: List[IssueCategory] = []


class SuggestRequest(BaseModel):
    title: str = ""
    description: str = ""
