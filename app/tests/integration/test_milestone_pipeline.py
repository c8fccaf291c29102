"""Intake change to delivered notification, with provider channels faked."""

import pytest

from infrastructure.notifications.models import Channel, DeliveryOutcome
from infrastructure.notifications.service import NotificationService
from modules.hydration import detect_milestones
from modules.preferences import InMemoryPreferenceStore
from tests.factories import FakeChannel, FakeTextGenerator


@pytest.fixture
def store(preference_factory):
    return InMemoryPreferenceStore([preference_factory(user_id="user-1")])


@pytest.mark.integration
class TestMilestonePipeline:
    def test_sms_outage_falls_back_to_whatsapp_once_per_day(
        self, settings_factory, store, transient_failure
    ):
        sms = FakeChannel(Channel.SMS, [transient_failure])
        whatsapp = FakeChannel(Channel.WHATSAPP)
        email = FakeChannel(Channel.EMAIL)
        service = NotificationService(
            settings_factory(),
            preference_store=store,
            text_generator=FakeTextGenerator(),
            channels=[sms, whatsapp, email],
        )
        try:
            first = detect_milestones("user-1", 900, 1100, 2000)
            again = detect_milestones("user-1", 900, 1050, 2000)

            result = service.trigger.handle(first[0])
            duplicate = service.trigger.handle(again[0])
        finally:
            service.shutdown()

        assert result.delivered_via == Channel.WHATSAPP
        assert [a.outcome for a in result.attempts] == [
            DeliveryOutcome.TRANSPORT_ERROR,
            DeliveryOutcome.SUCCESS,
        ]
        assert duplicate is None
        assert len(whatsapp.calls) == 1
        assert email.calls == []
        assert service.history.unread_count("user-1") == 2

    def test_goal_completion_uses_composed_text(self, settings_factory, store):
        sms = FakeChannel(Channel.SMS)
        generator = FakeTextGenerator()
        service = NotificationService(
            settings_factory(),
            preference_store=store,
            text_generator=generator,
            channels=[sms, FakeChannel(Channel.WHATSAPP), FakeChannel(Channel.EMAIL)],
        )
        try:
            event = detect_milestones("user-1", 1900, 2000, 2000)[0]
            result = service.trigger.handle(event)
        finally:
            service.shutdown()

        assert result.delivered_via == Channel.SMS
        assert generator.calls == [("Sam", "goal completion", "kind")]
        assert sms.calls == [("+61412345678", "Keep sipping, Sam!")]
