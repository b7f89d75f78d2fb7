from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import List

from hostelhub.models.enums import AnnouncementType, Role


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=5)
    content: str = Field(..., min_length=10)
    type: AnnouncementType
    target_hostels: List[str] = []
    target_blocks: List[str] = []
    target_roles: List[Role] = []

    @field_validator('target_hostels', 'target_blocks', mode='before')
    @classmethod
    def strip_targets(cls, v):
        if not isinstance(v, list):
            return v
        cleaned = []
        for s in v:
            if not isinstance(s, str) or not s.strip():
                raise ValueError('target entries must be non-empty strings')
            cleaned.append(s.strip())
        return cleaned


class AnnouncementOut(BaseModel):
    id: int
    title: str
    content: str
    type: AnnouncementType
    target_hostels: List[str]
    target_blocks: List[str]
    target_roles: List[Role]
    author_id: int
    created_at: datetime

    class Config:
        from_attributes = True
