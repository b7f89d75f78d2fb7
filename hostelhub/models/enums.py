import enum


class Role(str, enum.Enum):
    STUDENT = "STUDENT"
    MANAGEMENT = "MANAGEMENT"


class IssueStatus(str, enum.Enum):
    REPORTED = "REPORTED"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"


class IssuePriority(str, enum.Enum):
    """Declared lowest to highest; list ordering relies on this."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    EMERGENCY = "EMERGENCY"


class IssueCategory(str, enum.Enum):
    PLUMBING = "PLUMBING"
    ELECTRICAL = "ELECTRICAL"
    CLEANLINESS = "CLEANLINESS"
    INTERNET = "INTERNET"
    FURNITURE = "FURNITURE"
    SECURITY = "SECURITY"
    OTHER = "OTHER"


class Visibility(str, enum.Enum):
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class ReactionType(str, enum.Enum):
    UPVOTE = "UPVOTE"
    LIKE = "LIKE"
    URGENT = "URGENT"
    ME_TOO = "ME_TOO"


class AnnouncementType(str, enum.Enum):
    CLEANING = "CLEANING"
    PEST_CONTROL = "PEST_CONTROL"
    DOWNTIME = "DOWNTIME"
    MAINTENANCE = "MAINTENANCE"
    GENERAL = "GENERAL"


class LostFoundType(str, enum.Enum):
    LOST = "LOST"
    FOUND = "FOUND"


class LostFoundStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    CLAIMED = "CLAIMED"
    CLOSED = "CLOSED"


class ClaimStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


OPEN_STATUSES = (IssueStatus.REPORTED, IssueStatus.ASSIGNED, IssueStatus.IN_PROGRESS)
DONE_STATUSES = (IssueStatus.RESOLVED, IssueStatus.CLOSED)

# Labels used by older entry points, folded into the canonical member
PRIORITY_ALIASES = {"URGENT": IssuePriority.EMERGENCY}
CATEGORY_ALIASES = {
    "CARPENTRY": IssueCategory.FURNITURE,
    "CLEANING": IssueCategory.CLEANLINESS,
}
