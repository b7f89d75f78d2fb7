from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from hostelhub.api.deps import get_db, enum_filter
from hostelhub.core.auth import Actor, get_current_user
from hostelhub.models.enums import LostFoundStatus, LostFoundType
from hostelhub.schemas.lost_found import ClaimDecision, LostFoundCreate, LostFoundOut
from hostelhub.services import lost_found

router = APIRouter(prefix="/lost-found", tags=["lost-found"])


@router.get("", response_model=List[LostFoundOut])
def list_items(
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
    type: Optional[str] = Query(None, description="LOST, FOUND or 'all'"),
    status: Optional[str] = Query(None, description="ACTIVE, CLAIMED, CLOSED or 'all'"),
):
    return lost_found.list_items(
        db,
        item_type=enum_filter(type, LostFoundType, "type"),
        status=enum_filter(status, LostFoundStatus, "status"),
    )


@router.post("", response_model=LostFoundOut, status_code=status.HTTP_201_CREATED)
def create_item(
    payload: LostFoundCreate,
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    return lost_found.create_item(db, current_user, payload)


@router.post("/{item_id}/claim", response_model=LostFoundOut)
def claim_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    return lost_found.claim_item(db, current_user, item_id)


@router.post("/{item_id}/claim/resolve", response_model=LostFoundOut)
def resolve_claim(
    item_id: int,
    payload: ClaimDecision,
    db: Session = Depends(get_db),
    current_user: Actor = Depends(get_current_user),
):
    return lost_found.resolve_claim(db, current_user, item_id, payload.approve)
