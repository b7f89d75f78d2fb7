from pydantic import BaseModel, Field

from hostelhub.models.enums import IssueCategory, IssuePriority
from hostelhub.schemas.issue import CategorySuggestion


class VoiceRequest(BaseModel):
    """Body for POST /ai/process-voice."""
    transcript: str = Field(..., min_length=1, max_length=16_000)


class VoiceExtraction(BaseModel):
    title: str
    description: str
    category: IssueCategory
    priority: IssuePriority


class VoiceReportOut(VoiceExtraction):
    # keyword heuristic over the same text, shown next to the AI guess
    suggestion: CategorySuggestion
