"""
Keyword heuristics for issue text.

Two pure scorers live here: the category/priority suggester used by the
manual and voice report forms, and the mood classifier behind
/analytics/sentiment. Both implement a small protocol so an ML backend can
replace them without touching callers.
"""
from typing import Dict, Iterable, List, Protocol, Sequence, Tuple

from hostelhub.models.enums import IssueCategory, IssuePriority

# Order matters: on a score tie the earlier category wins
CATEGORY_KEYWORDS: Dict[IssueCategory, Tuple[str, ...]] = {
    IssueCategory.PLUMBING: (
        "water", "leak", "pipe", "drain", "flush", "tap", "faucet", "shower",
        "toilet", "sink", "bathroom", "washroom", "dripping", "clogged", "overflow",
    ),
    IssueCategory.ELECTRICAL: (
        "light", "power", "electricity", "switch", "socket", "outlet", "fan",
        "ac", "air conditioning", "bulb", "wire", "short circuit", "voltage",
        "electrical", "charging", "plug",
    ),
    IssueCategory.CLEANLINESS: (
        "dirty", "clean", "garbage", "trash", "smell", "odor", "mess", "dustbin",
        "sweep", "mop", "hygiene", "sanitation", "pest", "cockroach", "rat",
        "mosquito", "waste", "litter",
    ),
    IssueCategory.INTERNET: (
        "wifi", "internet", "network", "connection", "router", "slow", "speed",
        "lan", "ethernet", "broadband", "connectivity", "online", "offline",
    ),
    IssueCategory.FURNITURE: (
        "chair", "table", "bed", "desk", "cupboard", "wardrobe", "door", "window",
        "broken", "damaged", "furniture", "hinge", "lock", "drawer", "shelf",
    ),
}

# Checked in this order; the first level with any hit wins
PRIORITY_KEYWORDS: Tuple[Tuple[IssuePriority, Tuple[str, ...]], ...] = (
    (IssuePriority.EMERGENCY, (
        "emergency", "urgent", "critical", "immediate", "danger", "fire", "flood",
        "electrical shock", "gas leak", "broken glass", "injury",
    )),
    (IssuePriority.HIGH, (
        "important", "serious", "major", "severe", "bad", "terrible", "awful",
        "completely broken", "not working at all",
    )),
    (IssuePriority.MEDIUM, (
        "moderate", "needs attention", "should fix", "problem", "issue",
    )),
)

NEGATIVE_KEYWORDS: Tuple[str, ...] = (
    "broken", "not working", "urgent", "emergency", "bad", "terrible", "worst", "issue", "problem",
)
POSITIVE_KEYWORDS: Tuple[str, ...] = (
    "fixed", "resolved", "good", "great", "excellent", "working", "clean",
)

POSITIVE = "positive"
NEGATIVE = "negative"
NEUTRAL = "neutral"


class Categorizer(Protocol):
    def suggest(self, title: str, description: str) -> Tuple[IssueCategory, IssuePriority, int]:
        ...


class SentimentScorer(Protocol):
    def classify(self, text: str) -> str:
        ...


def _hits(text: str, keywords: Iterable[str]) -> int:
    """Number of distinct keywords present as substrings of text."""
    return sum(1 for keyword in keywords if keyword in text)


def _issue_text(title: str, description: str) -> str:
    return f"{title or ''} {description or ''}".lower()


def categorize(title: str, description: str) -> Tuple[IssueCategory, IssuePriority, int]:
    """
    Suggest (category, priority, confidence) for a report.

    Confidence is 0-100 and grows with the number of category keyword hits,
    plus a flat bonus when a non-default priority was detected.
    """
    text = _issue_text(title, description)

    best_category = IssueCategory.OTHER
    best_score = 0
    for category, keywords in CATEGORY_KEYWORDS.items():
        score = _hits(text, keywords)
        if score > best_score:
            best_category, best_score = category, score

    priority = IssuePriority.MEDIUM
    for level, keywords in PRIORITY_KEYWORDS:
        if _hits(text, keywords):
            priority = level
            break

    # no category match reads as a minor report
    if priority == IssuePriority.MEDIUM and best_score == 0:
        priority = IssuePriority.LOW

    bonus = 20 if priority != IssuePriority.MEDIUM else 0
    confidence = min(100, (best_score + bonus) * 10)
    return best_category, priority, confidence


def suggest_categories(text: str) -> List[IssueCategory]:
    """Every category with a keyword in text, in table order; [OTHER] if none."""
    text = (text or "").lower()
    matches = [category for category, keywords in CATEGORY_KEYWORDS.items() if _hits(text, keywords)]
    return matches or [IssueCategory.OTHER]


def classify_sentiment(text: str) -> str:
    text = (text or "").lower()
    negative = _hits(text, NEGATIVE_KEYWORDS)
    positive = _hits(text, POSITIVE_KEYWORDS)
    if positive > negative:
        return POSITIVE
    if negative > positive:
        return NEGATIVE
    return NEUTRAL


def overall_mood(labels: Sequence[str]) -> str:
    """Majority mood: more than half positive or negative, else neutral."""
    total = len(labels) or 1
    if labels.count(POSITIVE) / total > 0.5:
        return POSITIVE
    if labels.count(NEGATIVE) / total > 0.5:
        return NEGATIVE
    return NEUTRAL


def top_concerns(categories: Iterable[str], limit: int = 5) -> List[str]:
    """Most frequent categories first; ties keep first-seen order."""
    counts: Dict[str, int] = {}
    for category in categories:
        counts[category] = counts.get(category, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [category for category, _ in ranked[:limit]]


class KeywordCategorizer:
    def suggest(self, title: str, description: str) -> Tuple[IssueCategory, IssuePriority, int]:
        return categorize(title, description)


class KeywordSentimentScorer:
    def classify(self, text: str) -> str:
        return classify_sentiment(text)


default_categorizer: Categorizer = KeywordCategorizer()
default_sentiment_scorer: SentimentScorer = KeywordSentimentScorer()
