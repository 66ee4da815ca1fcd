from datetime import timedelta

from flask import json

from conftest import NOW
from flask_app.models import User, db


class TestVolunteerProfileAPI:
    """Test /api/volunteers/<id>/profile endpoint"""

    def test_profile_returns_derived_values(self, client, make_user):
        user = make_user(phone="1234567890", volunteer_partner_org="example-math")

        response = client.get(f"/api/volunteers/{user.id}/profile")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["phone_pretty"] == "123-456-7890"
        assert data["math_coaching_only"] is True
        assert data["num_volunteer_session_hours"] == 0.0
        assert isinstance(data["volunteer_point_rank"], float)

    def test_profile_can_skip_session_loading(self, client, make_user, make_session):
        user = make_user()
        make_session(user, created_at=NOW - timedelta(days=1))

        data = json.loads(client.get(f"/api/volunteers/{user.id}/profile?sessions=false").data)

        assert data["num_volunteer_session_hours"] is None
        assert data["num_past_sessions"] == 1

    def test_profile_read_heals_legacy_phone(self, client, make_user):
        user = make_user(phone="(123) 456-7890")
        user_id = user.id

        data = json.loads(client.get(f"/api/volunteers/{user_id}/profile").data)

        assert data["phone_pretty"] == "123-456-7890"
        db.session.expire_all()
        assert db.session.get(User, user_id).phone == "1234567890"

    def test_unknown_user_returns_404(self, client):
        response = client.get("/api/volunteers/404/profile")
        assert response.status_code == 404
        assert "not found" in json.loads(response.data)["error"]


class TestVolunteerHoursAPI:
    def test_hours_for_volunteer(self, client, make_user, make_session):
        user = make_user()
        make_session(
            user,
            created_at=NOW - timedelta(days=1),
            joined_after=timedelta(minutes=5),
            duration=timedelta(minutes=45),
        )

        data = json.loads(client.get(f"/api/volunteers/{user.id}/hours").data)

        assert data == {"id": user.id, "verified_hours": 0.75}

    def test_hours_for_student_is_rejected(self, client, make_user):
        student = make_user(is_volunteer=False)
        response = client.get(f"/api/volunteers/{student.id}/hours")
        assert response.status_code == 400


class TestVolunteerRankingAPI:
    def test_ranking_lists_highest_score_first(self, client, make_user):
        older = make_user(created_at=NOW - timedelta(weeks=10))
        newer = make_user(created_at=NOW - timedelta(weeks=1))

        data = json.loads(client.get("/api/volunteers/ranking").data)

        assert [r["id"] for r in data["results"]] == [older.id, newer.id]

    def test_ranking_limit(self, client, make_user):
        for _ in range(3):
            make_user()

        data = json.loads(client.get("/api/volunteers/ranking?limit=2").data)

        assert len(data["results"]) == 2

    def test_ranking_rejects_bad_limit(self, client):
        assert client.get("/api/volunteers/ranking?limit=abc").status_code == 400
        assert client.get("/api/volunteers/ranking?limit=0").status_code == 400

    def test_ranking_errors_return_500(self, client, monkeypatch):
        from flask_app.services.volunteer_profile_service import VolunteerProfileService

        def broken_rank(**kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(VolunteerProfileService, "rank_volunteers", broken_rank)

        response = client.get("/api/volunteers/ranking")

        assert response.status_code == 500
        assert json.loads(response.data)["results"] == []


class TestUpdatePhoneAPI:
    def test_put_phone_stores_canonical_value(self, client, make_user):
        user = make_user(phone=None)

        response = client.put(f"/api/volunteers/{user.id}/phone", json={"phone": "(555) 444-3333"})

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["phone"] == "5554443333"
        assert data["phone_pretty"] == "555-444-3333"

    def test_put_international_phone(self, client, make_user):
        user = make_user()

        data = json.loads(client.put(f"/api/volunteers/{user.id}/phone", json={"phone": "+44 7700 900123"}).data)

        assert data["phone"] == "+447700900123"
        assert data["phone_pretty"] == "+447700900123"

    def test_put_phone_requires_phone_field(self, client, make_user):
        user = make_user()
        assert client.put(f"/api/volunteers/{user.id}/phone", json={}).status_code == 400
        assert client.put(f"/api/volunteers/{user.id}/phone", json={"phone": 5551234567}).status_code == 400
