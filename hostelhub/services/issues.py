"""
Issue engine: creation, role-scoped reads, the status state machine,
emergencies, comments and reactions.

The state machine is permissive: management may move an issue
from any status to any other. What the engine guarantees is the stamping
rule, driven by STATUS_TIMESTAMPS, where each lifecycle timestamp is written
the first time its status is entered and never again.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import case, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hostelhub.core.audit import log_audit
from hostelhub.core.auth import Actor
from hostelhub.core.exceptions import ConflictError, NotFoundError
from hostelhub.core.validation import parse_payload
from hostelhub.models.enums import (
    IssueCategory, IssuePriority, IssueStatus, Visibility, ReactionType,
)
from hostelhub.models.issue import Comment, Issue, Reaction
from hostelhub.schemas.issue import (
    CommentCreate, IssueCreate, IssueDetailOut, IssueFilters, IssueListItem, IssueUpdate, SlaOut,
)
from hostelhub.services import policy, sla

logger = logging.getLogger(__name__)

NOT_SPECIFIED = "Not Specified"

STATUS_TIMESTAMPS = {
    IssueStatus.ASSIGNED: "assigned_at",
    IssueStatus.IN_PROGRESS: "in_progress_at",
    IssueStatus.RESOLVED: "resolved_at",
    IssueStatus.CLOSED: "closed_at",
}

PRIORITY_RANK = {p.value: rank for rank, p in enumerate(IssuePriority)}

REACTION_ADDED = "added"
REACTION_REMOVED = "removed"
REACTION_UPDATED = "updated"


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def _stamp_once(issue: Issue, field: str, when: datetime) -> bool:
    if getattr(issue, field) is None:
        setattr(issue, field, when)
        return True
    return False


def _audit_issue(db: Session, actor: Actor, issue: Issue, action: str, source: str, description: str,
                 risk_level: Optional[str] = None) -> None:
    log_audit(
        db,
        actor=actor,
        action=action,
        entity_type="issue",
        entity_id=str(issue.id),
        status=issue.status.value,
        due_at=sla.sla_due_at(issue),
        source=source,
        description=description,
        risk_level=risk_level,
    )


def create_issue(
    db: Session,
    actor: Actor,
    payload: Any,
    source: str = "api",
    now: Optional[datetime] = None,
) -> Issue:
    """
    File a new issue for the actor.

    Residence fields are a snapshot of the reporter's profile right now; a
    later room change does not move existing issues.
    """
    data = parse_payload(IssueCreate, payload)
    issue = Issue(
        title=data.title,
        description=data.description,
        category=data.category,
        priority=data.priority,
        visibility=data.visibility,
        media_urls=list(data.media_urls),
        hostel=actor.hostel or NOT_SPECIFIED,
        block=actor.block or NOT_SPECIFIED,
        room=actor.room or NOT_SPECIFIED,
        reporter_id=actor.id,
        status=IssueStatus.REPORTED,
        reported_at=_now(now),
    )
    db.add(issue)
    db.commit()
    db.refresh(issue)
    logger.info("Issue %s reported by user %s (%s/%s)", issue.id, actor.id, issue.category.value, issue.priority.value)

    _audit_issue(db, actor, issue, "created", source, f"Issue created: {issue.title}")
    return issue


def get_issue(db: Session, actor: Actor, issue_id: int) -> Issue:
    issue = db.get(Issue, issue_id)
    if issue is None:
        raise NotFoundError("Issue not found")
    policy.ensure(policy.can_read_issue(actor, issue))
    return issue


def get_issue_detail(db: Session, actor: Actor, issue_id: int, now: Optional[datetime] = None) -> IssueDetailOut:
    issue = get_issue(db, actor, issue_id)

    counts: Dict[str, int] = {}
    mine: Optional[ReactionType] = None
    for reaction in issue.reactions:
        counts[reaction.type.value] = counts.get(reaction.type.value, 0) + 1
        if reaction.user_id == actor.id:
            mine = reaction.type

    detail = IssueDetailOut.model_validate(issue)
    detail.reaction_counts = counts
    detail.my_reaction = mine
    timer = sla.evaluate(issue, now)
    detail.sla = SlaOut(**timer) if timer else None
    return detail


def list_issues(db: Session, actor: Actor, filters: Any = None) -> List[IssueListItem]:
    """
    Role-scoped issue list.

    Students get their own issues plus public ones; filters narrow that set.
    Ordered by priority (EMERGENCY first), then newest report first.
    """
    f = parse_payload(IssueFilters, filters or {})
    query = db.query(Issue)

    if not actor.is_management:
        query = query.filter(or_(Issue.reporter_id == actor.id, Issue.visibility == Visibility.PUBLIC))

    if f.category:
        query = query.filter(Issue.category == f.category)
    if f.priority:
        query = query.filter(Issue.priority == f.priority)
    if f.status:
        query = query.filter(Issue.status == f.status)

    priority_rank = case(PRIORITY_RANK, value=Issue.priority, else_=-1)
    issues = query.order_by(priority_rank.desc(), Issue.reported_at.desc(), Issue.id.desc()).all()

    ids = [issue.id for issue in issues]
    comment_counts: Dict[int, int] = {}
    reaction_counts: Dict[int, int] = {}
    if ids:
        comment_counts = dict(
            db.query(Comment.issue_id, func.count(Comment.id))
            .filter(Comment.issue_id.in_(ids))
            .group_by(Comment.issue_id)
            .all()
        )
        reaction_counts = dict(
            db.query(Reaction.issue_id, func.count(Reaction.id))
            .filter(Reaction.issue_id.in_(ids))
            .group_by(Reaction.issue_id)
            .all()
        )

    items = []
    for issue in issues:
        item = IssueListItem.model_validate(issue)
        item.comment_count = comment_counts.get(issue.id, 0)
        item.reaction_count = reaction_counts.get(issue.id, 0)
        items.append(item)
    return items


def update_status(
    db: Session,
    actor: Actor,
    issue_id: int,
    payload: Any,
    now: Optional[datetime] = None,
) -> Issue:
    """
    Move an issue to a new status and/or assignee (management only).

    Any transition is accepted. Entering a status stamps its timestamp only
    if unset; a non-empty assignee stamps assigned_at the same way. Status
    and stamps are committed together.
    """
    policy.ensure(policy.can_mutate_status(actor), "Only management can update issues")
    data = parse_payload(IssueUpdate, payload)

    issue = db.get(Issue, issue_id)
    if issue is None:
        raise NotFoundError("Issue not found")

    when = _now(now)
    previous = issue.status
    updates = data.model_dump(exclude_unset=True)

    if data.status is not None:
        issue.status = data.status
        field = STATUS_TIMESTAMPS.get(data.status)
        if field:
            _stamp_once(issue, field, when)

    if "assigned_to" in updates:
        issue.assigned_to = data.assigned_to
        if data.assigned_to:
            _stamp_once(issue, "assigned_at", when)

    db.commit()
    db.refresh(issue)
    logger.info("Issue %s: %s -> %s by user %s", issue.id, previous.value, issue.status.value, actor.id)

    _audit_issue(db, actor, issue, "updated", "api", f"Issue {previous.value} -> {issue.status.value}: {issue.title}")
    return issue


def create_emergency(db: Session, actor: Actor, emergency_type: str, location: str,
                     now: Optional[datetime] = None) -> Issue:
    """
    Raise a public, top-priority security issue on the actor's behalf.

    Title and description are generated here, so IssueCreate validation does
    not apply. The WARNING log line is the only notification hook.
    """
    emergency_type = (emergency_type or "").strip()
    location = (location or "").strip()
    issue = Issue(
        title=f"EMERGENCY: {emergency_type}",
        description=(
            f"Emergency alert triggered by {actor.name}\n"
            f"Location: {location}\n"
            f"Type: {emergency_type}\n\n"
            "This is an automated emergency alert. Please respond immediately."
        ),
        category=IssueCategory.SECURITY,
        priority=IssuePriority.EMERGENCY,
        status=IssueStatus.REPORTED,
        visibility=Visibility.PUBLIC,
        hostel=actor.hostel or NOT_SPECIFIED,
        block=actor.block or NOT_SPECIFIED,
        room=actor.room or NOT_SPECIFIED,
        reporter_id=actor.id,
        media_urls=[],
        reported_at=_now(now),
    )
    db.add(issue)
    db.commit()
    db.refresh(issue)
    logger.warning("EMERGENCY %s at %s raised by user %s (issue %s)", emergency_type, location, actor.id, issue.id)

    _audit_issue(db, actor, issue, "created", "emergency", issue.title, risk_level="high")
    return issue


def react(db: Session, actor: Actor, issue_id: int, reaction_type: ReactionType) -> Tuple[str, Optional[ReactionType]]:
    """
    Toggle or replace the actor's single reaction on an issue.

    Returns (result, current type): ("added", t), ("removed", None) or
    ("updated", t). A concurrent duplicate insert loses on the unique
    constraint and surfaces as ConflictError.
    """
    get_issue(db, actor, issue_id)
    reaction_type = ReactionType(reaction_type)

    existing = (
        db.query(Reaction)
        .filter(Reaction.issue_id == issue_id, Reaction.user_id == actor.id)
        .first()
    )

    if existing is not None:
        if existing.type == reaction_type:
            db.delete(existing)
            db.commit()
            return REACTION_REMOVED, None
        existing.type = reaction_type
        db.commit()
        return REACTION_UPDATED, reaction_type

    db.add(Reaction(issue_id=issue_id, user_id=actor.id, type=reaction_type))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Reaction changed concurrently, retry")
    return REACTION_ADDED, reaction_type


def add_comment(db: Session, actor: Actor, issue_id: int, payload: Any,
                now: Optional[datetime] = None) -> Comment:
    data = parse_payload(CommentCreate, payload)
    get_issue(db, actor, issue_id)

    comment = Comment(issue_id=issue_id, user_id=actor.id, content=data.content, created_at=_now(now))
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment
