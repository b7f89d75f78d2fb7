"""
Read-only aggregates for the management dashboard, the mood widget and the
leaderboard.

The arithmetic lives in small pure functions (average_hours, score_user,
rank_leaderboard, summarize_sentiment) so it can be checked without a
database; the *_for_db wrappers only gather rows.
"""
import math
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from hostelhub.models.announcement import Announcement
from hostelhub.models.enums import DONE_STATUSES, OPEN_STATUSES
from hostelhub.models.issue import Comment, Issue
from hostelhub.models.lost_found import LostFound
from hostelhub.models.user import User
from hostelhub.schemas.analytics import (
    AnalyticsCharts, AnalyticsOut, AnalyticsOverview, ChartPoint,
    LeaderboardEntry, LeaderboardOut, SentimentBreakdown, SentimentOut,
)
from hostelhub.services import heuristics, sla

RECENT_DAYS = 7
SENTIMENT_DAYS = 30
LEADERBOARD_SIZE = 10

POINTS_PER_REPORT = 10
POINTS_PER_RESOLVED = 15
POINTS_PER_COMMENT = 5

# (badge, field, threshold)
BADGES = (
    ("First Reporter", "issues_reported", 10),
    ("Problem Solver", "issues_resolved", 5),
    ("Helpful Neighbor", "comments_count", 10),
)


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def average_hours(pairs: Iterable[Tuple[datetime, Optional[datetime]]]) -> float:
    """
    Mean of (end - start) in hours over pairs whose end is set, rounded to
    one decimal. 0 when there is nothing to average.
    """
    durations = [sla.hours_between(start, end) for start, end in pairs if end is not None]
    if not durations:
        return 0.0
    return round_half_up(sum(durations) / len(durations), 1)


def score_user(issues_reported: int, issues_resolved: int, comments_count: int) -> Tuple[int, List[str]]:
    points = (
        issues_reported * POINTS_PER_REPORT
        + issues_resolved * POINTS_PER_RESOLVED
        + comments_count * POINTS_PER_COMMENT
    )
    counts = {
        "issues_reported": issues_reported,
        "issues_resolved": issues_resolved,
        "comments_count": comments_count,
    }
    badges = [badge for badge, field, threshold in BADGES if counts[field] >= threshold]
    return points, badges


def rank_leaderboard(rows: Iterable[Dict], limit: int = LEADERBOARD_SIZE) -> List[LeaderboardEntry]:
    """
    Score and rank user rows.

    Each row needs id, name, issues_reported, issues_resolved and
    comments_count. Sorted by points descending, ties by user id ascending.
    """
    scored = []
    for row in rows:
        points, badges = score_user(row["issues_reported"], row["issues_resolved"], row["comments_count"])
        scored.append(dict(row, points=points, badges=badges))

    scored.sort(key=lambda r: (-r["points"], r["id"]))
    return [
        LeaderboardEntry(rank=rank, **row)
        for rank, row in enumerate(scored[:limit], start=1)
    ]


def summarize_sentiment(
    issues: Sequence[Tuple[str, str, str]],
    scorer: heuristics.SentimentScorer = heuristics.default_sentiment_scorer,
) -> SentimentOut:
    """Classify (title, description, category) triples into a mood summary."""
    labels = [scorer.classify(f"{title} {description}") for title, description, _ in issues]
    total = len(labels) or 1

    def pct(label: str) -> int:
        return int(round_half_up(labels.count(label) / total * 100))

    return SentimentOut(
        overall=heuristics.overall_mood(labels),
        score=pct(heuristics.POSITIVE),
        total_issues=len(labels),
        sentiment_breakdown=SentimentBreakdown(
            positive=pct(heuristics.POSITIVE),
            neutral=pct(heuristics.NEUTRAL),
            negative=pct(heuristics.NEGATIVE),
        ),
        top_concerns=heuristics.top_concerns(category for _, _, category in issues),
    )


def _chart(db: Session, column, label=lambda v: v) -> List[ChartPoint]:
    rows = db.query(column, func.count(Issue.id)).group_by(column).order_by(func.count(Issue.id).desc()).all()
    return [ChartPoint(name=label(getattr(key, "value", key)), value=count) for key, count in rows]


def analytics_for_db(db: Session, now: Optional[datetime] = None) -> AnalyticsOut:
    now = now or datetime.now(timezone.utc)

    issues = db.query(Issue).all()
    overview = AnalyticsOverview(
        total_issues=len(issues),
        total_announcements=db.query(func.count(Announcement.id)).scalar() or 0,
        total_lost_found=db.query(func.count(LostFound.id)).scalar() or 0,
        total_users=db.query(func.count(User.id)).scalar() or 0,
        pending_issues=sum(1 for i in issues if i.status in OPEN_STATUSES),
        resolved_issues=sum(1 for i in issues if i.status in DONE_STATUSES),
        recent_issues=sum(1 for i in issues if sla.as_utc(i.reported_at) >= now - timedelta(days=RECENT_DAYS)),
        overdue_issues=sum(1 for i in issues if sla.is_overdue(i, now)),
        avg_response_time=average_hours((i.reported_at, i.assigned_at) for i in issues),
        avg_resolution_time=average_hours(
            (i.reported_at, i.resolved_at) for i in issues if i.status in DONE_STATUSES
        ),
    )

    charts = AnalyticsCharts(
        issues_by_status=_chart(db, Issue.status, lambda v: v.replace("_", " ")),
        issues_by_category=_chart(db, Issue.category),
        issues_by_priority=_chart(db, Issue.priority),
        issues_by_hostel=_chart(db, Issue.hostel),
    )
    return AnalyticsOut(overview=overview, charts=charts)


def sentiment_for_db(db: Session, now: Optional[datetime] = None) -> SentimentOut:
    now = now or datetime.now(timezone.utc)
    since = now - timedelta(days=SENTIMENT_DAYS)
    rows = (
        db.query(Issue.title, Issue.description, Issue.category, Issue.reported_at)
        .order_by(Issue.reported_at.asc(), Issue.id.asc())
        .all()
    )
    recent = [
        (title, description, getattr(category, "value", category))
        for title, description, category, reported_at in rows
        if sla.as_utc(reported_at) >= since
    ]
    return summarize_sentiment(recent)


def leaderboard_for_db(db: Session) -> LeaderboardOut:
    reported = dict(
        db.query(Issue.reporter_id, func.count(Issue.id)).group_by(Issue.reporter_id).all()
    )
    resolved = dict(
        db.query(Issue.reporter_id, func.count(Issue.id))
        .filter(Issue.status.in_(DONE_STATUSES))
        .group_by(Issue.reporter_id)
        .all()
    )
    comments = dict(
        db.query(Comment.user_id, func.count(Comment.id)).group_by(Comment.user_id).all()
    )

    rows = [
        {
            "id": user_id,
            "name": name,
            "issues_reported": reported.get(user_id, 0),
            "issues_resolved": resolved.get(user_id, 0),
            "comments_count": comments.get(user_id, 0),
        }
        for user_id, name in db.query(User.id, User.name).all()
    ]
    return LeaderboardOut(users=rank_leaderboard(rows))
