from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hostelhub.api.deps import get_db
from hostelhub.core.auth import Actor, get_current_user
from hostelhub.schemas.analytics import LeaderboardOut
from hostelhub.services import analytics

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("", response_model=LeaderboardOut)
def get_leaderboard(
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    return analytics.leaderboard_for_db(db)
