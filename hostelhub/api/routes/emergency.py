from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hostelhub.api.deps import get_db
from hostelhub.core.auth import Actor, get_current_user
from hostelhub.schemas.issue import EmergencyCreate, EmergencyOut
from hostelhub.services import issues

router = APIRouter(prefix="/emergency", tags=["emergency"])


@router.post("", response_model=EmergencyOut, status_code=status.HTTP_201_CREATED)
def raise_emergency(
    payload: EmergencyCreate,
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    """
    SOS button. Files a public EMERGENCY issue straight away; management is
    alerted through the log, with no delivery guarantee.
    """
    issue = issues.create_emergency(db, current_user, payload.type, payload.location)
    return EmergencyOut(message="Emergency alert sent to management", issue_id=issue.id)
