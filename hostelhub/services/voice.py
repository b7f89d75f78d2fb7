"""
Voice report extraction via LangChain.

ai_extract() turns a free-form spoken complaint into the fields of an issue
report. It never fails: any LLM problem (missing key, timeout, non-JSON reply)
yields FALLBACK with the raw transcript as the description.
"""
import json
import logging
from typing import Any, Dict

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from hostelhub.core.config import settings
from hostelhub.core.exceptions import ExternalServiceError
from hostelhub.models.enums import IssueCategory, IssuePriority
from hostelhub.schemas.issue import normalize_category, normalize_priority

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Voice Report (Parse Failed)"
DEFAULT_TITLE = "Voice Report"

VOICE_SYSTEM_PROMPT = """You are an AI assistant for a hostel issue tracker.
Analyze the user's complaint transcript and extract structured data.

Return ONLY a JSON object with these fields:
- title: A short, concise title (max 6-8 words).
- description: A polished but accurate version of the complaint.
- category: One of [PLUMBING, ELECTRICAL, CLEANLINESS, INTERNET, FURNITURE, SECURITY, OTHER]. Choose the most relevant.
- priority: One of [LOW, MEDIUM, HIGH, EMERGENCY].
    - EMERGENCY: Immediate danger (fire, gas leak, sparked wires, flooding).
    - HIGH: Major inconvenience (no water, no power, broken door).
    - MEDIUM: Standard maintenance.
    - LOW: Minor cosmetic issues or suggestions.

Output pure JSON only, no markdown, no explanations."""


def fallback(transcript: str) -> Dict[str, str]:
    return {
        "title": FALLBACK_TITLE,
        "description": transcript,
        "category": IssueCategory.OTHER.value,
        "priority": IssuePriority.MEDIUM.value,
    }


def _get_chat_model() -> ChatOpenAI:
    if not settings.OPENAI_API_KEY:
        raise ExternalServiceError("OpenAI API key is not configured. Set OPENAI_API_KEY in .env.")
    return ChatOpenAI(
        model=settings.AI_MODEL,
        api_key=settings.OPENAI_API_KEY,
        temperature=0.1,
        max_tokens=512,
        timeout=settings.AI_TIMEOUT_SECONDS,
        max_retries=0,
    )


def _strip_fences(content: str) -> str:
    return content.replace("```json", "").replace("```", "").strip()


def _coerce_label(raw: Any, enum_cls, normalize, default):
    if not isinstance(raw, str) or not raw.strip():
        return default.value
    label = normalize(raw)
    if isinstance(label, enum_cls):
        return label.value
    try:
        return enum_cls(label).value
    except ValueError:
        return default.value


def parse_extraction(content: str, transcript: str) -> Dict[str, str]:
    """
    Decode the model reply into the four report fields.

    Missing fields take defaults, legacy labels are migrated, unknown labels
    fall back to OTHER / MEDIUM. Raises ExternalServiceError when the reply
    is not a JSON object.
    """
    try:
        data = json.loads(_strip_fences(content or ""))
    except json.JSONDecodeError as e:
        raise ExternalServiceError("AI reply was not valid JSON", details={"error": str(e)})
    if not isinstance(data, dict):
        raise ExternalServiceError("AI reply was not a JSON object")

    title = data.get("title")
    description = data.get("description")
    return {
        "title": title.strip() if isinstance(title, str) and title.strip() else DEFAULT_TITLE,
        "description": description.strip() if isinstance(description, str) and description.strip() else transcript,
        "category": _coerce_label(data.get("category"), IssueCategory, normalize_category, IssueCategory.OTHER),
        "priority": _coerce_label(data.get("priority"), IssuePriority, normalize_priority, IssuePriority.MEDIUM),
    }


def ai_extract(transcript: str) -> Dict[str, str]:
    try:
        llm = _get_chat_model()
        response = llm.invoke([
            SystemMessage(content=VOICE_SYSTEM_PROMPT),
            HumanMessage(content=f'TRANSCRIPT: "{transcript}"'),
        ])
        content = response.content if hasattr(response, "content") else str(response)
        if not isinstance(content, str):
            raise ExternalServiceError("AI reply had no text content")
        return parse_extraction(content, transcript)
    except Exception:
        logger.warning("Voice extraction failed, using fallback", exc_info=True)
        return fallback(transcript)
