from unittest.mock import MagicMock

import pytest

from infrastructure.configuration import Settings
from infrastructure.configuration.features import NotificationFeatureSettings
from infrastructure.configuration.infrastructure import RetrySettings, ServerSettings
from infrastructure.configuration.integrations import (
    GeminiSettings,
    SendGridSettings,
    TwilioSettings,
)
from infrastructure.notifications.models import Channel
from infrastructure.operations import OperationResult, OperationStatus
from tests.factories import (
    FakeChannel,
    FakeTextGenerator,
    make_event,
    make_preference,
)


@pytest.fixture
def preference_factory():
    """Factory for NotificationPreference instances.

    Example:
        pref = preference_factory(preferred_channel=Channel.EMAIL, phone_number=None)
    """
    return make_preference


@pytest.fixture
def event_factory():
    """Factory for MilestoneEvent instances.

    Example:
        event = event_factory(raw_text="You've reached 25% of your daily goal!")
    """
    return make_event


@pytest.fixture
def fake_channel_factory():
    """Factory for FakeChannel instances with scripted outcomes."""

    def _factory(channel: Channel, *outcomes, configured: bool = True) -> FakeChannel:
        return FakeChannel(channel, list(outcomes) or None, configured=configured)

    return _factory


@pytest.fixture
def fake_channels(fake_channel_factory):
    """One succeeding fake channel per transport, keyed by Channel."""
    return {
        Channel.SMS: fake_channel_factory(Channel.SMS),
        Channel.WHATSAPP: fake_channel_factory(Channel.WHATSAPP),
        Channel.EMAIL: fake_channel_factory(Channel.EMAIL),
    }


@pytest.fixture
def text_generator():
    return FakeTextGenerator()


@pytest.fixture
def transient_failure():
    return OperationResult.transient_error("HTTP 503", error_code="HTTP_503")


@pytest.fixture
def permanent_failure():
    return OperationResult.error(
        OperationStatus.PERMANENT_ERROR, "HTTP 400: invalid To", error_code="HTTP_400"
    )


@pytest.fixture
def settings_factory():
    """Build a real Settings object without reading credentials from the environment.

    Example:
        settings = settings_factory(twilio={"TWILIO_ACCOUNT_SID": "AC123", ...})
    """

    def _factory(
        twilio=None, sendgrid=None, gemini=None, notifications=None, retry=None
    ) -> Settings:
        twilio_values = {
            "TWILIO_ACCOUNT_SID": None,
            "TWILIO_AUTH_TOKEN": None,
            "TWILIO_PHONE_NUMBER": None,
            "TWILIO_WHATSAPP_NUMBER": None,
        }
        twilio_values.update(twilio or {})
        sendgrid_values = {"SENDGRID_API_KEY": None}
        sendgrid_values.update(sendgrid or {})
        gemini_values = {"GEMINI_API_KEY": None}
        gemini_values.update(gemini or {})
        return Settings(
            twilio=TwilioSettings(**twilio_values),
            sendgrid=SendGridSettings(**sendgrid_values),
            gemini=GeminiSettings(**gemini_values),
            notifications=NotificationFeatureSettings(**(notifications or {})),
            retry=RetrySettings(**(retry or {})),
            server=ServerSettings(),
        )

    return _factory


@pytest.fixture
def mock_settings():
    """Mock Settings instance for testing provider clients."""
    mock = MagicMock()
    mock.twilio.TWILIO_ACCOUNT_SID = "AC123"
    mock.twilio.TWILIO_AUTH_TOKEN = "secret-token"
    mock.twilio.TWILIO_PHONE_NUMBER = "+15005550006"
    mock.twilio.TWILIO_API_URL = "https://api.twilio.test/2010-04-01"
    mock.twilio.whatsapp_sender = "+14155238886"
    mock.twilio.is_configured = True
    mock.sendgrid.SENDGRID_API_KEY = "SG.key"
    mock.sendgrid.SENDER_EMAIL = "hydration@example.com"
    mock.sendgrid.SENDGRID_API_URL = "https://api.sendgrid.test/v3"
    mock.sendgrid.is_configured = True
    mock.gemini.GEMINI_API_KEY = "gemini-key"
    mock.gemini.GEMINI_API_URL = "https://gemini.test/v1beta/models/gemini-pro:generateContent"
    mock.gemini.is_configured = True
    mock.notifications.transport_timeout_seconds = 10.0
    mock.notifications.compose_timeout_seconds = 5.0
    return mock
