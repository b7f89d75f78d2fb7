"""
Resolution timer: how long an open issue has waited against its SLA.

Informational only; nothing in the engine enforces these targets.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from hostelhub.core.database import as_utc
from hostelhub.models.enums import IssuePriority, IssueStatus, DONE_STATUSES
from hostelhub.models.issue import Issue

SLA_HOURS = {
    IssuePriority.EMERGENCY: 2,
    IssuePriority.HIGH: 24,
    IssuePriority.MEDIUM: 48,
    IssuePriority.LOW: 72,
}
DEFAULT_SLA_HOURS = 48
WARNING_RATIO = 0.75


def hours_between(start: datetime, end: datetime) -> float:
    return (as_utc(end) - as_utc(start)).total_seconds() / 3600.0


def sla_hours(priority: IssuePriority) -> int:
    return SLA_HOURS.get(priority, DEFAULT_SLA_HOURS)


def sla_due_at(issue: Issue) -> datetime:
    return as_utc(issue.reported_at) + timedelta(hours=sla_hours(issue.priority))


def is_open(status: IssueStatus) -> bool:
    return status not in DONE_STATUSES


def evaluate(issue: Issue, now: Optional[datetime] = None) -> Optional[dict]:
    """
    Timer state for an open issue, or None once it is resolved or closed.

    Returns a dict with sla_hours, elapsed_hours (1 decimal), urgency
    (normal / warning / critical) and breached.
    """
    if not is_open(issue.status):
        return None
    now = now or datetime.now(timezone.utc)
    target = sla_hours(issue.priority)
    elapsed = hours_between(issue.reported_at, now)

    if elapsed >= target:
        urgency = "critical"
    elif elapsed >= target * WARNING_RATIO:
        urgency = "warning"
    else:
        urgency = "normal"

    return {
        "sla_hours": target,
        "elapsed_hours": round(elapsed, 1),
        "urgency": urgency,
        "breached": urgency == "critical",
    }


def is_overdue(issue: Issue, now: Optional[datetime] = None) -> bool:
    state = evaluate(issue, now)
    return bool(state and state["breached"])
