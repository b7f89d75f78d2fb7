from conftest import NOW, issue_payload
from hostelhub.services import announcements, issues


class TestAuditLogRoute:

    def test_students_cannot_read_the_trail(self, client, student_headers):
        assert client.get('/audit-logs', headers=student_headers).status_code == 403

    def test_trail_of_one_issue_newest_first(self, client, db, student_actor, manager_actor, manager_headers):
        issue = issues.create_issue(db, student_actor, issue_payload())
        issues.create_issue(db, student_actor, issue_payload())
        issues.update_status(db, manager_actor, issue.id, {'status': 'ASSIGNED'})

        response = client.get(
            '/audit-logs', params={'entity_type': 'issue', 'entity_id': issue.id}, headers=manager_headers,
        )
        assert response.status_code == 200
        assert [row['action'] for row in response.json()] == ['updated', 'created']

    def test_filter_by_acting_user(self, client, db, student_actor, other_actor, manager_headers):
        issues.create_issue(db, student_actor, issue_payload())
        issues.create_issue(db, other_actor, issue_payload())

        rows = client.get('/audit-logs', params={'user_id': other_actor.id}, headers=manager_headers).json()
        assert [row['actor_id'] for row in rows] == [str(other_actor.id)]

    def test_overdue_only_keeps_open_issues_past_sla(self, client, db, student_actor, manager_actor, manager_headers):
        issues.create_issue(db, student_actor, issue_payload(priority='EMERGENCY'), now=NOW)
        announcements.create_announcement(db, manager_actor, {
            'title': 'Mess timings changed',
            'content': 'Dinner now runs from 7pm to 10pm on weekdays.',
            'type': 'GENERAL',
        })

        rows = client.get('/audit-logs', params={'overdue_only': True}, headers=manager_headers).json()
        assert [row['entity_type'] for row in rows] == ['issue']
        assert rows[0]['risk_level'] == 'high'

    def test_bad_time_bound_is_400(self, client, manager_headers):
        response = client.get('/audit-logs', params={'since': 'last week'}, headers=manager_headers)
        assert response.status_code == 400
        assert response.json()['details'][0]['field'] == 'since'
