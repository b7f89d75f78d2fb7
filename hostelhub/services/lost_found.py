"""
Lost & found board: posting items, claiming them and settling claims.

Claiming is a compare-and-swap on status so two students racing for the same
item cannot both win; the loser gets ConflictError.
"""
import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from hostelhub.core.audit import log_audit
from hostelhub.core.auth import Actor
from hostelhub.core.exceptions import ConflictError, NotFoundError
from hostelhub.core.validation import parse_payload
from hostelhub.models.enums import ClaimStatus, LostFoundStatus, LostFoundType
from hostelhub.models.lost_found import LostFound
from hostelhub.schemas.lost_found import LostFoundCreate
from hostelhub.services import policy

logger = logging.getLogger(__name__)


def _get(db: Session, item_id: int) -> LostFound:
    item = db.get(LostFound, item_id)
    if item is None:
        raise NotFoundError("Item not found")
    return item


def create_item(db: Session, actor: Actor, payload: Any) -> LostFound:
    data = parse_payload(LostFoundCreate, payload)
    item = LostFound(
        type=data.type,
        item_name=data.item_name.strip(),
        description=data.description.strip(),
        location=data.location.strip(),
        date=data.date,
        contact_info=data.contact_info,
        image_urls=list(data.image_urls),
        status=LostFoundStatus.ACTIVE,
        reporter_id=actor.id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("%s item %s posted by user %s", item.type.value, item.id, actor.id)

    log_audit(
        db,
        actor=actor,
        action="created",
        entity_type="lost_found",
        entity_id=str(item.id),
        status=item.status.value,
        description=f"{item.type.value}: {item.item_name}",
    )
    return item


def list_items(
    db: Session,
    item_type: Optional[LostFoundType] = None,
    status: Optional[LostFoundStatus] = None,
) -> List[LostFound]:
    query = db.query(LostFound)
    if item_type:
        query = query.filter(LostFound.type == item_type)
    if status:
        query = query.filter(LostFound.status == status)
    return query.order_by(LostFound.created_at.desc(), LostFound.id.desc()).all()


def claim_item(db: Session, actor: Actor, item_id: int) -> LostFound:
    item = _get(db, item_id)
    policy.ensure(policy.can_claim(actor, item), "You cannot claim your own item")
    if item.status != LostFoundStatus.ACTIVE:
        raise ConflictError("Item is no longer available")

    updated = (
        db.query(LostFound)
        .filter(LostFound.id == item_id, LostFound.status == LostFoundStatus.ACTIVE)
        .update(
            {
                LostFound.status: LostFoundStatus.CLAIMED,
                LostFound.claimed_by: actor.id,
                LostFound.claim_status: ClaimStatus.PENDING,
            },
            synchronize_session=False,
        )
    )
    if updated == 0:
        db.rollback()
        raise ConflictError("Item is no longer available")
    db.commit()
    db.refresh(item)
    logger.info("Item %s claimed by user %s", item.id, actor.id)

    log_audit(
        db,
        actor=actor,
        action="claimed",
        entity_type="lost_found",
        entity_id=str(item.id),
        status=item.status.value,
        description=f"Claim on {item.item_name}",
    )
    return item


def resolve_claim(db: Session, actor: Actor, item_id: int, approve: bool) -> LostFound:
    """
    Settle a pending claim (reporter or management).

    Approving closes the item; rejecting reopens it so someone else may claim.
    """
    item = _get(db, item_id)
    policy.ensure(policy.can_resolve_claim(actor, item), "Only the reporter or management can settle a claim")
    if item.claim_status != ClaimStatus.PENDING:
        raise ConflictError("No pending claim on this item")

    if approve:
        values = {
            LostFound.claim_status: ClaimStatus.APPROVED,
            LostFound.status: LostFoundStatus.CLOSED,
        }
    else:
        values = {
            LostFound.claim_status: ClaimStatus.REJECTED,
            LostFound.status: LostFoundStatus.ACTIVE,
            LostFound.claimed_by: None,
        }

    updated = (
        db.query(LostFound)
        .filter(LostFound.id == item_id, LostFound.claim_status == ClaimStatus.PENDING)
        .update(values, synchronize_session=False)
    )
    if updated == 0:
        db.rollback()
        raise ConflictError("No pending claim on this item")
    db.commit()
    db.refresh(item)
    logger.info("Claim on item %s %s by user %s", item.id, item.claim_status.value.lower(), actor.id)

    log_audit(
        db,
        actor=actor,
        action="claim_approved" if approve else "claim_rejected",
        entity_type="lost_found",
        entity_id=str(item.id),
        status=item.status.value,
        description=f"Claim on {item.item_name}: {item.claim_status.value}",
    )
    return item
