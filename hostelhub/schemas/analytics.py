from pydantic import BaseModel
from typing import List


class AnalyticsOverview(BaseModel):
    """Top cards on the management dashboard."""
    total_issues: int = 0
    total_announcements: int = 0
    total_lost_found: int = 0
    total_users: int = 0
    pending_issues: int = 0
    resolved_issues: int = 0
    recent_issues: int = 0
    overdue_issues: int = 0
    avg_response_time: float = 0.0     # hours, report -> assignment
    avg_resolution_time: float = 0.0   # hours, report -> resolution


class ChartPoint(BaseModel):
    name: str
    value: int = 0


class AnalyticsCharts(BaseModel):
    issues_by_status: List[ChartPoint] = []
    issues_by_category: List[ChartPoint] = []
    issues_by_priority: List[ChartPoint] = []
    issues_by_hostel: List[ChartPoint] = []


class AnalyticsOut(BaseModel):
    overview: AnalyticsOverview = AnalyticsOverview()
    charts: AnalyticsCharts = AnalyticsCharts()


class SentimentBreakdown(BaseModel):
    positive: int = 0
    neutral: int = 0
    negative: int = 0


class SentimentOut(BaseModel):
    overall: str = "neutral"
    score: int = 0
    total_issues: int = 0
    sentiment_breakdown: SentimentBreakdown = SentimentBreakdown()
    top_concerns: List[str] = []


class LeaderboardEntry(BaseModel):
    id: int
    name: str
    points: int = 0
    badges: List[str] = []
    issues_reported: int = 0
    issues_resolved: int = 0
    comments_count: int = 0
    rank: int


class LeaderboardOut(BaseModel):
    users: List[LeaderboardEntry] = []
