from datetime import datetime, timezone
from typing import Optional

from hostelhub.core.auth import Actor
from hostelhub.models.audit_log import AuditLog
from hostelhub.core.database import as_utc
from sqlalchemy.orm import Session

OPEN_ISSUE_STATUSES = ("reported", "assigned", "in_progress")


def _compute_risk_level(
    entity_type: str,
    status: Optional[str],
    due_at: Optional[datetime],
    explicit: Optional[str] = None,
) -> str:
    if explicit:
        return explicit
    if due_at is None:
        return "low"
    now = datetime.now(timezone.utc)
    overdue = as_utc(due_at) < now
    if not overdue:
        return "low"

    status_l = (status or "").lower()
    if entity_type == "issue" and status_l in OPEN_ISSUE_STATUSES:
        return "high"
    return "low"


def is_overdue(log: AuditLog) -> bool:
    if not log.due_at:
        return False
    now = datetime.now(timezone.utc)
    return as_utc(log.due_at) < now and (log.status or "").lower() in OPEN_ISSUE_STATUSES


def log_audit(
    db: Session,
    *,
    actor: Actor,
    action: str,
    entity_type: str,
    entity_id: str,
    source: str = "api",
    status: Optional[str] = None,
    due_at: Optional[datetime] = None,
    description: Optional[str] = None,
    risk_level: Optional[str] = None,
) -> AuditLog:
    log = AuditLog(
        actor_id=str(actor.id),
        actor_email=actor.email,
        actor_role=actor.role.value,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        source=source,
        status=status,
        due_at=due_at,
        description=description,
        risk_level=_compute_risk_level(entity_type, status, due_at, risk_level),
    )
    db.add(log)
    db.commit()
    db.refresh(log)
    return log
