from fastapi.testclient import TestClient

from hackhub.models import Event, UserRole


class TestRegistrationRoutes:

    def test_register_without_body(self, client: TestClient, db, make_event, make_user, auth_headers):
        event = make_event(max_participants=3)
        participant = make_user()

        response = client.post(f"/api/events/{event.id}/register", headers=auth_headers(participant))

        assert response.status_code == 201
        data = response.json()
        assert data["eventId"] == event.id
        assert data["userId"] == participant.id
        assert data["status"] == "confirmed"
        assert data["teamMembers"] == []
        db.expire_all()
        assert db.get(Event, event.id).current_participants == 1

    def test_register_with_team(self, client: TestClient, make_event, make_user, auth_headers):
        event = make_event()
        body = {"teamName": "Bit Flippers", "teamMembers": [{"name": "Linus", "email": "linus@example.com"}]}

        response = client.post(f"/api/events/{event.id}/register", json=body, headers=auth_headers(make_user()))

        assert response.status_code == 201
        assert response.json()["teamName"] == "Bit Flippers"
        assert response.json()["teamMembers"][0]["email"] == "linus@example.com"

    def test_register_rejects_bad_member_email(self, client: TestClient, make_event, make_user, auth_headers):
        event = make_event()
        body = {"teamMembers": [{"name": "Linus", "email": "not-an-email"}]}

        response = client.post(f"/api/events/{event.id}/register", json=body, headers=auth_headers(make_user()))

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "teamMembers.0.email"

    def test_register_requires_token(self, client: TestClient, make_event):
        event = make_event()
        assert client.post(f"/api/events/{event.id}/register").status_code == 401

    def test_register_unknown_event(self, client: TestClient, make_user, auth_headers):
        response = client.post("/api/events/nope/register", headers=auth_headers(make_user()))
        assert response.status_code == 404

    def test_register_closed_event(self, client: TestClient, make_event, make_user, auth_headers):
        event = make_event(status="completed")

        response = client.post(f"/api/events/{event.id}/register", headers=auth_headers(make_user()))

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_state"

    def test_register_twice(self, client: TestClient, make_event, make_user, auth_headers):
        event = make_event()
        headers = auth_headers(make_user())
        client.post(f"/api/events/{event.id}/register", headers=headers)

        response = client.post(f"/api/events/{event.id}/register", headers=headers)

        assert response.status_code == 400
        assert response.json()["error"] == "duplicate_registration"

    def test_register_full_event(self, client: TestClient, make_event, make_user, auth_headers):
        event = make_event(max_participants=1)
        first = client.post(f"/api/events/{event.id}/register", headers=auth_headers(make_user()))

        second = client.post(f"/api/events/{event.id}/register", headers=auth_headers(make_user()))

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json() == {"error": "capacity_exceeded", "message": "Event is full"}

    def test_cancel_and_register_again(self, client: TestClient, db, make_event, make_user, auth_headers):
        event = make_event(max_participants=1)
        headers = auth_headers(make_user())
        registration_id = client.post(f"/api/events/{event.id}/register", headers=headers).json()["id"]

        cancelled = client.delete(f"/api/registrations/{registration_id}", headers=headers)
        again = client.post(f"/api/events/{event.id}/register", headers=headers)

        assert cancelled.status_code == 204
        assert again.status_code == 201
        db.expire_all()
        assert db.get(Event, event.id).current_participants == 1

    def test_cancel_by_stranger(self, client: TestClient, make_event, make_user, auth_headers):
        event = make_event()
        registration_id = client.post(
            f"/api/events/{event.id}/register", headers=auth_headers(make_user())
        ).json()["id"]

        response = client.delete(f"/api/registrations/{registration_id}", headers=auth_headers(make_user()))

        assert response.status_code == 403

    def test_cancel_missing(self, client: TestClient, make_user, auth_headers):
        response = client.delete("/api/registrations/nope", headers=auth_headers(make_user()))
        assert response.status_code == 404

    def test_event_registrations_visible_to_organizer_only(
        self, client: TestClient, make_event, make_user, organizer, auth_headers
    ):
        event = make_event()
        participant = make_user()
        client.post(f"/api/events/{event.id}/register", headers=auth_headers(participant))

        as_organizer = client.get(f"/api/events/{event.id}/registrations", headers=auth_headers(organizer))
        as_participant = client.get(f"/api/events/{event.id}/registrations", headers=auth_headers(participant))

        assert as_organizer.status_code == 200
        assert [r["user"]["id"] for r in as_organizer.json()] == [participant.id]
        assert as_participant.status_code == 403

    def test_user_registrations(self, client: TestClient, make_event, make_user, auth_headers):
        event = make_event(title="Mine")
        participant = make_user()
        admin = make_user(UserRole.ADMIN)
        client.post(f"/api/events/{event.id}/register", headers=auth_headers(participant))

        own = client.get(f"/api/users/{participant.id}/registrations", headers=auth_headers(participant))
        by_admin = client.get(f"/api/users/{participant.id}/registrations", headers=auth_headers(admin))
        by_other = client.get(f"/api/users/{participant.id}/registrations", headers=auth_headers(make_user()))

        assert [r["event"]["title"] for r in own.json()] == ["Mine"]
        assert by_admin.status_code == 200
        assert by_other.status_code == 403

    def test_submit_project(self, client: TestClient, make_event, make_user, auth_headers):
        event = make_event()
        headers = auth_headers(make_user())
        registration_id = client.post(f"/api/events/{event.id}/register", headers=headers).json()["id"]

        response = client.patch(
            f"/api/registrations/{registration_id}/submission",
            json={"submissionUrl": "https://github.com/example/project", "submissionDescription": "Demo"},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["submissionUrl"].startswith("https://github.com/example/project")
        assert response.json()["submittedAt"] is not None
