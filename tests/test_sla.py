import pytest

from conftest import NOW, hours_after
from hostelhub.models.enums import IssuePriority, IssueStatus
from hostelhub.models.issue import Issue
from hostelhub.services import sla


def make_issue(priority=IssuePriority.MEDIUM, status=IssueStatus.REPORTED) -> Issue:
    return Issue(priority=priority, status=status, reported_at=NOW)


class TestResolutionTimer:

    @pytest.mark.parametrize('priority,hours', [
        (IssuePriority.EMERGENCY, 2),
        (IssuePriority.HIGH, 24),
        (IssuePriority.MEDIUM, 48),
        (IssuePriority.LOW, 72),
    ])
    def test_targets(self, priority, hours):
        assert sla.sla_hours(priority) == hours

    @pytest.mark.parametrize('elapsed,urgency', [
        (10, 'normal'),
        (36, 'warning'),
        (48, 'critical'),
    ])
    def test_urgency_bands(self, elapsed, urgency):
        state = sla.evaluate(make_issue(), now=hours_after(NOW, elapsed))
        assert state['urgency'] == urgency
        assert state['breached'] == (urgency == 'critical')

    def test_done_issues_have_no_timer(self):
        assert sla.evaluate(make_issue(status=IssueStatus.RESOLVED), now=hours_after(NOW, 100)) is None
        assert not sla.is_overdue(make_issue(status=IssueStatus.CLOSED), now=hours_after(NOW, 100))

    def test_naive_timestamps_are_utc(self):
        issue = Issue(priority=IssuePriority.EMERGENCY, status=IssueStatus.ASSIGNED,
                      reported_at=NOW.replace(tzinfo=None))
        state = sla.evaluate(issue, now=hours_after(NOW, 1.5))
        assert state['elapsed_hours'] == 1.5
        assert state['urgency'] == 'warning'
