from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timezone
from typing import List, Optional

from hostelhub.models.enums import LostFoundType, LostFoundStatus, ClaimStatus


def parse_calendar_date(value: str) -> datetime:
    """
    Parse an ISO date ("2024-05-26") or date-time ("2024-05-26T10:00:00Z").
    Naive values are taken as UTC. Raises ValueError for anything else.
    """
    dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


class LostFoundCreate(BaseModel):
    type: LostFoundType
    item_name: str = Field(..., min_length=2)
    description: str = Field(..., min_length=10)
    location: str = Field(..., min_length=2)
    contact_info: Optional[str] = None
    date: datetime
    image_urls: List[str] = []

    @field_validator('date', mode='before')
    @classmethod
    def validate_date(cls, v):
        if isinstance(v, str):
            try:
                return parse_calendar_date(v)
            except ValueError:
                raise ValueError("date must be a valid calendar date (YYYY-MM-DD)")
        return v


class ClaimDecision(BaseModel):
    approve: bool


class LostFoundOut(BaseModel):
    id: int
    type: LostFoundType
    item_name: str
    description: str
    location: str
    date: datetime
    contact_info: Optional[str]
    image_urls: List[str]
    status: LostFoundStatus
    claim_status: Optional[ClaimStatus]
    reporter_id: int
    claimed_by: Optional[int]
    created_at: datetime

    class Config:
        from_attributes = True
