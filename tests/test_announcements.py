import pytest

from conftest import NOW, hours_after, make_user
from hostelhub.core.auth import Actor
from hostelhub.core.exceptions import ForbiddenError, ValidationError
from hostelhub.models.enums import AnnouncementType, Role
from hostelhub.services import announcements


def announcement_payload(**overrides) -> dict:
    payload = {
        'title': 'Water supply downtime',
        'content': 'Water will be off between 10am and 1pm for tank cleaning.',
        'type': 'DOWNTIME',
    }
    payload.update(overrides)
    return payload


class TestCreateAnnouncement:

    def test_students_cannot_post(self, db, student_actor):
        with pytest.raises(ForbiddenError):
            announcements.create_announcement(db, student_actor, announcement_payload())

    def test_management_posts_with_targets(self, db, manager_actor):
        a = announcements.create_announcement(
            db, manager_actor,
            announcement_payload(target_hostels=[' Hostel A '], target_roles=['STUDENT']),
        )
        assert a.target_hostels == ['Hostel A']
        assert a.target_roles == ['STUDENT']
        assert a.target_blocks == []

    @pytest.mark.parametrize('targets', [['   '], [123], ['Hostel A', '']])
    def test_malformed_hostel_targets_are_rejected(self, db, manager_actor, student_actor, targets):
        with pytest.raises(ValidationError) as exc:
            announcements.create_announcement(db, manager_actor, announcement_payload(target_hostels=targets))
        assert any(d['field'].startswith('target_hostels') for d in exc.value.details)
        assert announcements.list_announcements(db, student_actor) == []

    def test_blank_block_target_is_rejected(self, db, manager_actor):
        with pytest.raises(ValidationError):
            announcements.create_announcement(db, manager_actor, announcement_payload(target_blocks=[' ']))

    def test_short_content_rejected(self, db, manager_actor):
        with pytest.raises(ValidationError):
            announcements.create_announcement(db, manager_actor, announcement_payload(content='soon'))

    def test_post_over_http_is_management_only(self, client, student_headers, manager_headers):
        assert client.post('/announcements', json=announcement_payload(), headers=student_headers).status_code == 403
        response = client.post('/announcements', json=announcement_payload(), headers=manager_headers)
        assert response.status_code == 201
        assert response.json()['type'] == 'DOWNTIME'


class TestAudienceTargeting:

    def test_student_role_target_reaches_every_hostel(self, db, manager_actor, student_actor, other_actor):
        a = announcements.create_announcement(db, manager_actor, announcement_payload(target_roles=['STUDENT']))

        assert [x.id for x in announcements.list_announcements(db, student_actor)] == [a.id]
        assert [x.id for x in announcements.list_announcements(db, other_actor)] == [a.id]

    def test_management_only_target_is_hidden_from_students(self, db, manager_actor, student_actor):
        announcements.create_announcement(db, manager_actor, announcement_payload(target_roles=['MANAGEMENT']))

        assert announcements.list_announcements(db, student_actor) == []
        assert len(announcements.list_announcements(db, manager_actor)) == 1

    def test_hostel_target_filters_by_residence(self, db, manager_actor, student_actor, other_actor):
        announcements.create_announcement(db, manager_actor, announcement_payload(target_hostels=['Hostel B']))

        assert announcements.list_announcements(db, student_actor) == []
        assert len(announcements.list_announcements(db, other_actor)) == 1

    def test_student_without_hostel_misses_hostel_targeted(self, db, manager_actor):
        homeless = Actor.from_user(make_user(db, 'New Joiner', 'new@campus.edu', hostel=None))
        announcements.create_announcement(db, manager_actor, announcement_payload(target_hostels=['Hostel A']))
        announcements.create_announcement(db, manager_actor, announcement_payload())

        assert len(announcements.list_announcements(db, homeless)) == 1

    def test_blocks_are_not_used_for_filtering(self, db, manager_actor, student_actor):
        announcements.create_announcement(db, manager_actor, announcement_payload(target_blocks=['Z9']))
        assert len(announcements.list_announcements(db, student_actor)) == 1

    def test_newest_first_and_type_filter(self, client, db, manager_actor, student_headers):
        older = announcements.create_announcement(db, manager_actor, announcement_payload(), now=NOW)
        newer = announcements.create_announcement(
            db, manager_actor, announcement_payload(type='PEST_CONTROL'), now=hours_after(NOW, 3),
        )

        everything = client.get('/announcements', params={'type': 'all'}, headers=student_headers).json()
        assert [a['id'] for a in everything] == [newer.id, older.id]

        pests = client.get('/announcements', params={'type': 'PEST_CONTROL'}, headers=student_headers).json()
        assert [a['id'] for a in pests] == [newer.id]
        assert pests[0]['type'] == AnnouncementType.PEST_CONTROL.value

    def test_role_enum_round_trips_in_output(self, client, db, manager_actor, manager_headers):
        announcements.create_announcement(db, manager_actor, announcement_payload(target_roles=[Role.STUDENT]))
        body = client.get('/announcements', headers=manager_headers).json()
        assert body[0]['target_roles'] == ['STUDENT']
