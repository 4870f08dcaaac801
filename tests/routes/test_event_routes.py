from datetime import timedelta
from unittest.mock import patch

from fastapi.testclient import TestClient

from hackhub.core.time_utils import utcnow
from hackhub.main import app
from hackhub.models import UserRole


def event_body(**overrides) -> dict:
    now = utcnow()
    body = {
        "title": "Night Hack",
        "description": "Build until sunrise",
        "status": "upcoming",
        "startDate": (now + timedelta(days=10)).isoformat(),
        "endDate": (now + timedelta(days=11)).isoformat(),
        "registrationDeadline": (now + timedelta(days=8)).isoformat(),
        "maxParticipants": 2,
        "tags": ["night"],
    }
    body.update(overrides)
    return body


class TestEventRoutes:

    def test_create_event_as_organizer(self, client: TestClient, organizer, auth_headers):
        response = client.post("/api/events", json=event_body(), headers=auth_headers(organizer))

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Night Hack"
        assert data["organizerId"] == organizer.id
        assert data["currentParticipants"] == 0
        assert data["maxParticipants"] == 2
        assert data["allowTeams"] is True

    def test_create_event_requires_token(self, client: TestClient):
        response = client.post("/api/events", json=event_body())
        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"

    def test_create_event_rejects_bad_token(self, client: TestClient):
        response = client.post("/api/events", json=event_body(), headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_create_event_forbidden_for_participant(self, client: TestClient, make_user, auth_headers):
        response = client.post("/api/events", json=event_body(), headers=auth_headers(make_user()))
        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    def test_create_event_validation_body(self, client: TestClient, organizer, auth_headers):
        body = event_body(title="", maxParticipants=0)
        del body["startDate"]

        response = client.post("/api/events", json=body, headers=auth_headers(organizer))

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "validation_error"
        fields = {err["field"] for err in data["errors"]}
        assert {"title", "startDate", "maxParticipants"} <= fields

    def test_list_and_filter(self, client: TestClient, make_event):
        make_event(title="Live One", status="live")
        make_event(title="Next One")

        everything = client.get("/api/events")
        live = client.get("/api/events", params={"status": "live"})

        assert everything.status_code == 200
        assert {e["title"] for e in everything.json()} == {"Live One", "Next One"}
        assert [e["title"] for e in live.json()] == ["Live One"]

    def test_list_rejects_unknown_status(self, client: TestClient):
        assert client.get("/api/events", params={"status": "paused"}).status_code == 400

    def test_get_event_details(self, client: TestClient, make_event, organizer):
        event = make_event()

        response = client.get(f"/api/events/{event.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["organizer"]["id"] == organizer.id
        assert data["registrations"] == []
        assert data["startDate"].endswith(("Z", "+00:00"))

    def test_get_missing_event(self, client: TestClient):
        response = client.get("/api/events/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "not_found", "message": "Event not found"}

    def test_update_by_owner(self, client: TestClient, make_event, organizer, auth_headers):
        event = make_event()

        response = client.patch(
            f"/api/events/{event.id}", json={"title": "Renamed"}, headers=auth_headers(organizer)
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"

    def test_update_by_other_organizer_forbidden(self, client: TestClient, make_event, make_user, auth_headers):
        event = make_event()
        intruder = make_user(UserRole.ORGANIZER)

        response = client.patch(f"/api/events/{event.id}", json={"title": "Mine"}, headers=auth_headers(intruder))

        assert response.status_code == 403

    def test_update_by_admin(self, client: TestClient, make_event, make_user, auth_headers):
        event = make_event()
        admin = make_user(UserRole.ADMIN)

        response = client.patch(f"/api/events/{event.id}", json={"status": "live"}, headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json()["status"] == "live"

    def test_update_rejects_null_list_field(self, client: TestClient, make_event, organizer, auth_headers):
        event = make_event(tags=["ai"])

        response = client.patch(f"/api/events/{event.id}", json={"tags": None}, headers=auth_headers(organizer))

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": "tags", "message": "Field may not be null"}]
        one = client.get(f"/api/events/{event.id}")
        assert one.status_code == 200
        assert one.json()["tags"] == ["ai"]
        assert client.get("/api/events").status_code == 200

    def test_update_missing_event(self, client: TestClient, organizer, auth_headers):
        response = client.patch("/api/events/nope", json={"title": "x"}, headers=auth_headers(organizer))
        assert response.status_code == 404

    def test_delete_then_get(self, client: TestClient, make_event, organizer, auth_headers):
        event = make_event()

        response = client.delete(f"/api/events/{event.id}", headers=auth_headers(organizer))

        assert response.status_code == 204
        assert client.get(f"/api/events/{event.id}").status_code == 404

    def test_delete_forbidden_for_participant(self, client: TestClient, make_event, make_user, auth_headers):
        event = make_event()
        response = client.delete(f"/api/events/{event.id}", headers=auth_headers(make_user()))
        assert response.status_code == 403


class TestStatsRoute:

    def test_stats(self, client: TestClient, make_event):
        make_event(status="live")
        make_event(status="completed")

        response = client.get("/api/stats")

        assert response.status_code == 200
        assert response.json() == {
            "totalEvents": 2,
            "totalParticipants": 0,
            "activeEvents": 1,
            "completedEvents": 1,
        }

    def test_unexpected_failure_is_opaque(self, client: TestClient, caplog):
        failing_client = TestClient(app, raise_server_exceptions=False)
        with patch("hackhub.api.endpoints.stats.event_service.get_platform_stats", side_effect=RuntimeError("boom")):
            response = failing_client.get("/api/stats")

        assert response.status_code == 500
        assert response.json() == {"error": "internal_error", "message": "Internal server error"}
        logged = [r for r in caplog.records if r.getMessage() == "Unhandled exception on /api/stats"]
        assert logged and logged[0].exc_info[0] is RuntimeError
