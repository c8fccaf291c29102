from unittest.mock import MagicMock

import pytest
import requests

from infrastructure.clients.sendgrid import SendGridClient
from infrastructure.operations import OperationStatus


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.mark.unit
class TestSendGridClient:
    def test_send_email_posts_json(self, mock_settings, session):
        response = MagicMock(status_code=202, headers={"X-Message-Id": "msg-1"})
        session.post.return_value = response
        client = SendGridClient(mock_settings, session=session)

        result = client.send_email("jane@example.com", "Subject", "text", "<p>html</p>")

        assert result.is_success
        assert result.data == {"message_id": "msg-1"}
        args, kwargs = session.post.call_args
        assert args[0] == "https://api.sendgrid.test/v3/mail/send"
        assert kwargs["headers"]["Authorization"] == "Bearer SG.key"
        payload = kwargs["json"]
        assert payload["personalizations"] == [{"to": [{"email": "jane@example.com"}]}]
        assert payload["from"] == {"email": "hydration@example.com"}
        assert [c["type"] for c in payload["content"]] == ["text/plain", "text/html"]

    def test_not_configured(self, mock_settings, session):
        mock_settings.sendgrid.is_configured = False
        client = SendGridClient(mock_settings, session=session)

        result = client.send_email("jane@example.com", "Subject", "text")

        assert result.status == OperationStatus.NOT_CONFIGURED
        session.post.assert_not_called()

    def test_server_error_is_transient(self, mock_settings, session):
        response = MagicMock(status_code=503, headers={}, text="unavailable")
        response.json.side_effect = ValueError("not json")
        session.post.return_value = response
        client = SendGridClient(mock_settings, session=session)

        result = client.send_email("jane@example.com", "Subject", "text")

        assert result.is_transient
