from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hostelhub.api.deps import get_db
from hostelhub.core.audit import is_overdue
from hostelhub.core.auth import Actor, require_role
from hostelhub.core.exceptions import ValidationError
from hostelhub.models.audit_log import AuditLog
from hostelhub.models.enums import Role
from hostelhub.schemas.audit_log import AuditLogOut

router = APIRouter(prefix="/audit-logs", tags=["audit-logs"])


def _parse_bound(value: str, field: str) -> datetime:
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Invalid {field}", details=[{"field": field, "message": "expected ISO date-time"}])
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@router.get("", response_model=List[AuditLogOut])
def list_audit_logs(
    db: Session = Depends(get_db),
    current_user: Actor = Depends(require_role(Role.MANAGEMENT)),
    since: Optional[str] = Query(None, description="ISO date-time"),
    until: Optional[str] = Query(None, description="ISO date-time"),
    user_id: Optional[int] = Query(None, description="Acting user"),
    entity_type: Optional[str] = Query(None, description="issue|announcement|lost_found"),
    entity_id: Optional[int] = Query(None, description="Trail of a single record"),
    risk_level: Optional[str] = Query(None, description="low|high"),
    overdue_only: bool = Query(False, description="Open issues past their SLA"),
    limit: int = Query(50, ge=1, le=200),
):
    q = db.query(AuditLog)

    if since:
        q = q.filter(AuditLog.created_at >= _parse_bound(since, "since"))
    if until:
        q = q.filter(AuditLog.created_at <= _parse_bound(until, "until"))
    if user_id is not None:
        q = q.filter(AuditLog.actor_id == str(user_id))
    if entity_type:
        q = q.filter(AuditLog.entity_type == entity_type)
    if entity_id is not None:
        q = q.filter(AuditLog.entity_id == str(entity_id))
    if risk_level:
        q = q.filter(AuditLog.risk_level == risk_level)

    logs = q.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit).all()

    if overdue_only:
        logs = [log for log in logs if is_overdue(log)]
    return logs
