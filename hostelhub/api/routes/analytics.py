from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hostelhub.api.deps import get_db
from hostelhub.core.auth import Actor, get_current_user, require_role
from hostelhub.models.enums import Role
from hostelhub.schemas.analytics import AnalyticsOut, SentimentOut
from hostelhub.services import analytics

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsOut)
def get_analytics(
    db: Session = Depends(get_db),
    current_user: Actor = Depends(require_role(Role.MANAGEMENT)),
):
    return analytics.analytics_for_db(db)


@router.get("/sentiment", response_model=SentimentOut)
def get_sentiment(
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    """Mood of the last 30 days of reports, from keyword hits."""
    return analytics.sentiment_for_db(db)
