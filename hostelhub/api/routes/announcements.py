from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from hostelhub.api.deps import get_db, enum_filter
from hostelhub.core.auth import Actor, get_current_user
from hostelhub.models.enums import AnnouncementType
from hostelhub.schemas.announcement import AnnouncementCreate, AnnouncementOut
from hostelhub.services import announcements

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.get("", response_model=List[AnnouncementOut])
def list_announcements(
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
    type: Optional[str] = Query(None, description="Announcement type or 'all'"),
):
    return announcements.list_announcements(
        db, current_user, enum_filter(type, AnnouncementType, "type")
    )


@router.post("", response_model=AnnouncementOut, status_code=status.HTTP_201_CREATED)
def create_announcement(
    payload: AnnouncementCreate,
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    return announcements.create_announcement(db, current_user, payload)
