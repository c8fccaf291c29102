import pytest
from fastapi.testclient import TestClient

from api.v1.routes import messages
from infrastructure.notifications.history import HistoryEntry
from infrastructure.notifications.models import MilestoneKind
from infrastructure.services import get_notification_service
from utils.tests import create_test_app


@pytest.fixture
def client(notification_service):
    app = create_test_app(
        messages.router,
        dependency_overrides={get_notification_service: lambda: notification_service},
    )
    return TestClient(app)


@pytest.fixture
def history(notification_service):
    history = notification_service.history
    history.append("user-1", HistoryEntry(id="a", text="25% done", kind=MilestoneKind.REMINDER))
    history.append("user-1", HistoryEntry(id="b", text="Goal!", kind=MilestoneKind.ACHIEVEMENT))
    return history


@pytest.mark.unit
class TestPersonalize:
    def test_returns_generated_message(self, client):
        response = client.post(
            "/messages/personalize",
            json={"userName": "Sam", "milestoneLabel": "50% of daily goal", "tone": "funny"},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Keep sipping, Sam!"}

    def test_snake_case_input_is_accepted(self, client):
        response = client.post(
            "/messages/personalize",
            json={"user_name": "Sam", "milestone_label": "goal completion"},
        )
        assert response.status_code == 200

    def test_missing_label_is_rejected(self, client):
        response = client.post("/messages/personalize", json={"userName": "Sam"})
        assert response.status_code == 422

    def test_unknown_tone_is_rejected(self, client):
        response = client.post(
            "/messages/personalize",
            json={"userName": "Sam", "milestoneLabel": "50%", "tone": "sweet"},
        )
        assert response.status_code == 422


@pytest.mark.unit
class TestMessageCenter:
    def test_list_newest_first(self, client, history):
        response = client.get("/messages/user-1")

        assert response.status_code == 200
        body = response.json()
        assert [e["id"] for e in body["entries"]] == ["b", "a"]
        assert body["unreadCount"] == 2

    def test_empty_history(self, client):
        assert client.get("/messages/nobody").json() == {"entries": [], "unreadCount": 0}

    def test_mark_one_read(self, client, history):
        response = client.post("/messages/user-1/a/read")

        assert response.status_code == 204
        assert history.unread_count("user-1") == 1

    def test_mark_unknown_read(self, client, history):
        response = client.post("/messages/user-1/zzz/read")

        assert response.status_code == 404
        assert response.json()["detail"] == "message not found"

    def test_mark_all_read(self, client, history):
        assert client.post("/messages/user-1/read").status_code == 204
        assert history.unread_count("user-1") == 0

    def test_delete_entry(self, client, history):
        assert client.delete("/messages/user-1/a").status_code == 204
        assert [e.id for e in history.list("user-1")] == ["b"]

    def test_delete_unknown_entry(self, client, history):
        assert client.delete("/messages/user-1/zzz").status_code == 404

    def test_clear(self, client, history):
        assert client.delete("/messages/user-1").status_code == 204
        assert history.list("user-1") == []
