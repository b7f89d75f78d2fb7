import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from hostelhub.core.audit import log_audit
from hostelhub.core.auth import Actor
from hostelhub.core.validation import parse_payload
from hostelhub.models.announcement import Announcement
from hostelhub.models.enums import AnnouncementType
from hostelhub.schemas.announcement import AnnouncementCreate
from hostelhub.services import policy

logger = logging.getLogger(__name__)


def create_announcement(db: Session, actor: Actor, payload: Any,
                        now: Optional[datetime] = None) -> Announcement:
    policy.ensure(policy.can_create_announcement(actor), "Only management can post announcements")
    data = parse_payload(AnnouncementCreate, payload)

    announcement = Announcement(
        title=data.title.strip(),
        content=data.content.strip(),
        type=data.type,
        target_hostels=list(data.target_hostels),
        target_blocks=list(data.target_blocks),
        target_roles=[role.value for role in data.target_roles],
        author_id=actor.id,
        created_at=now or datetime.now(timezone.utc),
    )
    db.add(announcement)
    db.commit()
    db.refresh(announcement)
    logger.info("Announcement %s (%s) posted by user %s", announcement.id, announcement.type.value, actor.id)

    log_audit(
        db,
        actor=actor,
        action="created",
        entity_type="announcement",
        entity_id=str(announcement.id),
        description=f"Announcement: {announcement.title}",
    )
    return announcement


def list_announcements(db: Session, actor: Actor,
                       announcement_type: Optional[AnnouncementType] = None) -> List[Announcement]:
    """
    Announcements the actor is in the audience for, newest first.

    Targets are JSON arrays, so the audience check runs in Python rather than
    as a portable SQL filter.
    """
    query = db.query(Announcement)
    if announcement_type:
        query = query.filter(Announcement.type == announcement_type)
    rows = query.order_by(Announcement.created_at.desc(), Announcement.id.desc()).all()
    return [a for a in rows if policy.can_see_announcement(actor, a)]
