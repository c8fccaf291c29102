import pytest
from fastapi.testclient import TestClient

from infrastructure.notifications.trigger import get_trigger
from infrastructure.services import get_notification_service
from server import server


@pytest.fixture
def fresh_service():
    get_notification_service.cache_clear()
    yield
    get_notification_service.cache_clear()


@pytest.mark.integration
class TestServerLifespan:
    def test_lifespan_starts_and_stops_trigger(self, fresh_service):
        with TestClient(server.handler) as client:
            assert get_trigger() is get_notification_service().trigger
            assert client.get("/version").status_code == 200

        with pytest.raises(RuntimeError):
            get_trigger()

    def test_health_lists_every_channel(self, fresh_service):
        with TestClient(server.handler) as client:
            response = client.get("/health")

        assert response.status_code == 200
        assert set(response.json()["channels"]) == {"SMS", "WHATSAPP", "EMAIL"}

    def test_v1_routes_are_mounted(self, fresh_service):
        with TestClient(server.handler) as client:
            response = client.get("/api/v1/messages/nobody")

        assert response.status_code == 200
        assert response.json() == {"entries": [], "unreadCount": 0}

    def test_lifespan_can_be_entered_twice(self, fresh_service):
        with TestClient(server.handler):
            first = get_notification_service()

        with TestClient(server.handler) as client:
            second = get_notification_service()
            assert client.get("/health").status_code == 200

        assert second is not first
        assert first.trigger.is_closed
