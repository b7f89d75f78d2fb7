"""
AI routes.

- POST /ai/process-voice: send a speech transcript, get back draft issue
  fields. Always answers 200; when the model is unavailable the draft is
  the "Parse Failed" fallback and the student edits it by hand.
"""
from fastapi import APIRouter, Depends

from hostelhub.core.auth import Actor, get_current_user
from hostelhub.schemas.issue import CategorySuggestion
from hostelhub.schemas.voice import VoiceReportOut, VoiceRequest
from hostelhub.services import voice
from hostelhub.services.heuristics import default_categorizer

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/process-voice", response_model=VoiceReportOut)
def process_voice(
    payload: VoiceRequest,
    current_user: Actor = Depends(get_current_user),
):
    extracted = voice.ai_extract(payload.transcript)
    category, priority, confidence = default_categorizer.suggest(extracted["title"], extracted["description"])
    return VoiceReportOut(
        **extracted,
        suggestion=CategorySuggestion(category=category, priority=priority, confidence=confidence),
    )
