"""
Authorization policy.

Every role/ownership rule lives here as a named predicate so routes and
engines never branch on role inline. Engines call ``ensure`` with one of these
predicates and get a ForbiddenError when it fails.
"""
from typing import Optional

from hostelhub.core.auth import Actor
from hostelhub.core.exceptions import ForbiddenError
from hostelhub.models.announcement import Announcement
from hostelhub.models.enums import Role, Visibility
from hostelhub.models.issue import Issue
from hostelhub.models.lost_found import LostFound


def can_read_issue(actor: Actor, issue: Issue) -> bool:
    if actor.is_management:
        return True
    return issue.visibility == Visibility.PUBLIC or issue.reporter_id == actor.id


def can_mutate_status(actor: Actor) -> bool:
    return actor.is_management


def can_create_announcement(actor: Actor) -> bool:
    return actor.is_management


def can_see_announcement(actor: Actor, announcement: Announcement) -> bool:
    """
    Management sees everything. A student sees an announcement when both the
    hostel and role filters admit them; an empty filter admits everyone.
    """
    if actor.is_management:
        return True
    hostels = announcement.target_hostels or []
    roles = announcement.target_roles or []
    hostel_ok = not hostels or (actor.hostel is not None and actor.hostel in hostels)
    role_ok = not roles or Role.STUDENT.value in roles
    return hostel_ok and role_ok


def can_claim(actor: Actor, item: LostFound) -> bool:
    # status is checked separately: a non-ACTIVE item is a conflict, not a permission problem
    return item.reporter_id != actor.id


def can_resolve_claim(actor: Actor, item: LostFound) -> bool:
    return actor.is_management or item.reporter_id == actor.id


def can_view_analytics(actor: Actor) -> bool:
    return actor.is_management


def ensure(allowed: bool, message: Optional[str] = None) -> None:
    if not allowed:
        raise ForbiddenError(message or "Forbidden")
