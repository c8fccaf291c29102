import pytest

from infrastructure.notifications.models import Channel
from infrastructure.notifications.service import NotificationService
from infrastructure.notifications.trigger import teardown_trigger
from modules.preferences import InMemoryPreferenceStore
from tests.factories import FakeChannel, FakeTextGenerator


@pytest.fixture
def preference_store(preference_factory):
    return InMemoryPreferenceStore([preference_factory(user_id="user-1")])


@pytest.fixture
def api_channels():
    return {
        Channel.SMS: FakeChannel(Channel.SMS),
        Channel.WHATSAPP: FakeChannel(Channel.WHATSAPP),
        Channel.EMAIL: FakeChannel(Channel.EMAIL),
    }


@pytest.fixture
def notification_service(settings_factory, preference_store, api_channels):
    """NotificationService wired to fakes; no network and no process-wide trigger."""
    service = NotificationService(
        settings_factory(),
        preference_store=preference_store,
        text_generator=FakeTextGenerator(),
        channels=list(api_channels.values()),
    )
    yield service
    service.shutdown()
    teardown_trigger()
