from hostelhub.core.auth import Actor
from hostelhub.models.announcement import Announcement
from hostelhub.models.enums import Role, Visibility
from hostelhub.models.issue import Issue
from hostelhub.models.lost_found import LostFound
from hostelhub.services import policy

STUDENT = Actor(user_id=1, role=Role.STUDENT, hostel='Hostel A')
OTHER = Actor(user_id=2, role=Role.STUDENT, hostel='Hostel B')
MANAGER = Actor(user_id=3, role=Role.MANAGEMENT)


class TestIssuePolicy:

    def test_private_issue_readers(self):
        issue = Issue(reporter_id=1, visibility=Visibility.PRIVATE)
        assert policy.can_read_issue(STUDENT, issue)
        assert policy.can_read_issue(MANAGER, issue)
        assert not policy.can_read_issue(OTHER, issue)

    def test_public_issue_is_readable_by_all(self):
        issue = Issue(reporter_id=1, visibility=Visibility.PUBLIC)
        assert policy.can_read_issue(OTHER, issue)

    def test_only_management_mutates_status(self):
        assert policy.can_mutate_status(MANAGER)
        assert not policy.can_mutate_status(STUDENT)


class TestAnnouncementPolicy:

    def test_empty_targets_reach_everyone(self):
        a = Announcement(target_hostels=[], target_roles=[])
        assert policy.can_see_announcement(STUDENT, a)
        assert policy.can_see_announcement(OTHER, a)

    def test_both_filters_must_admit(self):
        a = Announcement(target_hostels=['Hostel A'], target_roles=['MANAGEMENT'])
        assert not policy.can_see_announcement(STUDENT, a)
        assert policy.can_see_announcement(MANAGER, a)

    def test_only_management_posts(self):
        assert policy.can_create_announcement(MANAGER)
        assert not policy.can_create_announcement(STUDENT)


class TestLostFoundPolicy:

    def test_reporter_cannot_claim(self):
        item = LostFound(reporter_id=1)
        assert not policy.can_claim(STUDENT, item)
        assert policy.can_claim(OTHER, item)

    def test_claim_settlers(self):
        item = LostFound(reporter_id=1)
        assert policy.can_resolve_claim(STUDENT, item)
        assert policy.can_resolve_claim(MANAGER, item)
        assert not policy.can_resolve_claim(OTHER, item)
