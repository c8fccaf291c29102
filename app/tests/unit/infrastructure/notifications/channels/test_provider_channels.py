"""Unit tests for the Twilio and SendGrid channel adapters."""

from unittest.mock import MagicMock

import pytest

from infrastructure.clients.sendgrid import SendGridClient
from infrastructure.clients.twilio import TwilioClient
from infrastructure.notifications.channels.email import (
    EMAIL_SUBJECT,
    SendGridEmailChannel,
    render_html,
)
from infrastructure.notifications.channels.twilio import TwilioMessageChannel
from infrastructure.notifications.models import Channel
from infrastructure.operations import OperationResult, OperationStatus


@pytest.fixture
def twilio_client():
    client = MagicMock(spec=TwilioClient)
    client.is_configured = True
    client.send_message.return_value = OperationResult.success(
        data={"sid": "SM123", "status": "queued"}
    )
    return client


@pytest.fixture
def sendgrid_client():
    client = MagicMock(spec=SendGridClient)
    client.is_configured = True
    client.send_email.return_value = OperationResult.success(data={"message_id": "msg-1"})
    return client


@pytest.mark.unit
class TestTwilioMessageChannel:
    def test_sms_delivery(self, twilio_client):
        channel = TwilioMessageChannel(Channel.SMS, twilio_client)

        result = channel.deliver("+61412345678", "Drink up")

        assert result.is_success
        assert result.data == {"provider_ref": "SM123"}
        twilio_client.send_message.assert_called_once_with(
            to="+61412345678", body="Drink up", whatsapp=False
        )

    def test_whatsapp_delivery_sets_flag(self, twilio_client):
        channel = TwilioMessageChannel(Channel.WHATSAPP, twilio_client)

        channel.deliver("+61412345678", "Drink up")

        assert twilio_client.send_message.call_args.kwargs["whatsapp"] is True
        assert channel.channel_name == "WHATSAPP"

    def test_failure_is_returned(self, twilio_client):
        failure = OperationResult.transient_error("503")
        twilio_client.send_message.return_value = failure

        assert TwilioMessageChannel(Channel.SMS, twilio_client).deliver("+1", "x") is failure

    def test_rejects_email_channel(self, twilio_client):
        with pytest.raises(ValueError):
            TwilioMessageChannel(Channel.EMAIL, twilio_client)

    def test_health_check_reflects_configuration(self, twilio_client):
        twilio_client.is_configured = False
        health = TwilioMessageChannel(Channel.SMS, twilio_client).health_check()
        assert health.status == OperationStatus.NOT_CONFIGURED


@pytest.mark.unit
class TestSendGridEmailChannel:
    def test_delivery_sends_text_and_html(self, sendgrid_client):
        channel = SendGridEmailChannel(sendgrid_client)

        result = channel.deliver("jane@example.com", "Drink up")

        assert result.is_success
        assert result.data == {"provider_ref": "msg-1"}
        kwargs = sendgrid_client.send_email.call_args.kwargs
        assert kwargs["to"] == "jane@example.com"
        assert kwargs["subject"] == EMAIL_SUBJECT
        assert kwargs["text_body"] == "Drink up"
        assert "Drink up" in kwargs["html_body"]

    def test_render_html_escapes_message(self):
        html = render_html("<script>alert(1)</script>")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "Hydration Reminder" in html

    def test_channel_is_email(self, sendgrid_client):
        assert SendGridEmailChannel(sendgrid_client).channel == Channel.EMAIL
