"""Unit tests for NotificationService wiring."""

import pytest

from infrastructure.notifications.models import Channel, MilestoneKind, PreferenceUpdate
from infrastructure.notifications.service import NotificationService
from infrastructure.notifications.trigger import get_trigger, teardown_trigger
from infrastructure.operations import OperationResult
from modules.preferences import InMemoryPreferenceStore
from tests.factories import FakeChannel, FakeTextGenerator


@pytest.fixture
def channels():
    return [FakeChannel(Channel.SMS), FakeChannel(Channel.WHATSAPP), FakeChannel(Channel.EMAIL)]


@pytest.fixture
def service(settings_factory, channels, preference_factory):
    store = InMemoryPreferenceStore([preference_factory()])
    svc = NotificationService(
        settings_factory(),
        preference_store=store,
        text_generator=FakeTextGenerator(),
        channels=channels,
    )
    yield svc
    svc.shutdown()


@pytest.mark.unit
class TestNotificationServiceWiring:
    def test_default_channels_report_unconfigured(self, settings_factory):
        svc = NotificationService(settings_factory(), preference_store=InMemoryPreferenceStore())
        try:
            assert svc.health_check() == {"SMS": False, "WHATSAPP": False, "EMAIL": False}
        finally:
            svc.shutdown()

    def test_configured_twilio_reports_ready(self, settings_factory):
        settings = settings_factory(
            twilio={
                "TWILIO_ACCOUNT_SID": "AC123",
                "TWILIO_AUTH_TOKEN": "token",
                "TWILIO_PHONE_NUMBER": "+15005550006",
            }
        )
        svc = NotificationService(settings, preference_store=InMemoryPreferenceStore())
        try:
            assert svc.health_check() == {"SMS": True, "WHATSAPP": True, "EMAIL": False}
        finally:
            svc.shutdown()

    def test_circuit_breakers_follow_settings(self, settings_factory, channels):
        enabled = NotificationService(
            settings_factory(), preference_store=InMemoryPreferenceStore(), channels=channels
        )
        disabled = NotificationService(
            settings_factory(notifications={"NOTIFY_CIRCUIT_BREAKER_ENABLED": False}),
            preference_store=InMemoryPreferenceStore(),
            channels=channels,
        )
        try:
            assert set(enabled.sender.circuit_breakers) == {
                Channel.SMS,
                Channel.WHATSAPP,
                Channel.EMAIL,
            }
            assert disabled.sender.circuit_breakers == {}
        finally:
            enabled.shutdown()
            disabled.shutdown()

    def test_start_installs_process_wide_trigger(self, service):
        service.start()
        assert get_trigger() is service.trigger
        service.shutdown()
        with pytest.raises(RuntimeError):
            get_trigger()


@pytest.mark.unit
class TestNotificationServiceOperations:
    def test_personalize(self, service):
        assert service.personalize("Sam", "50% of daily goal") == "Keep sipping, Sam!"

    def test_personalize_falls_back(self, settings_factory):
        svc = NotificationService(
            settings_factory(),
            preference_store=InMemoryPreferenceStore(),
            text_generator=FakeTextGenerator(OperationResult.not_configured("no key")),
            channels=[],
        )
        try:
            assert "halfway there" in svc.personalize("Sam", "50% of daily goal")
        finally:
            svc.shutdown()

    def test_send_reminder_with_message(self, service, channels):
        pref = service.get_preference("user-1")

        result = service.send_reminder(pref, "  Drink now  ")

        assert result.delivered_via == Channel.SMS
        assert channels[0].calls == [("+61412345678", "Drink now")]

    def test_send_reminder_composes_when_blank(self, service, channels):
        pref = service.get_preference("user-1")

        service.send_reminder(pref, "   ")

        assert channels[0].calls[0][1] == "Keep sipping, Sam!"

    def test_save_preference(self, service):
        saved = service.save_preference(
            "user-2", PreferenceUpdate(preferred_channel=Channel.EMAIL, email="jo@example.com")
        )
        assert service.get_preference("user-2") == saved

    def test_publish_milestone(self, service, channels, event_factory):
        service.start()

        future = service.publish_milestone(
            event_factory(kind=MilestoneKind.REMINDER, threshold_percent=25)
        )

        future.result(timeout=5)
        assert len(channels[0].calls) == 1
        assert service.history.list("user-1")[0].kind == MilestoneKind.REMINDER

    def test_publish_after_shutdown_is_rejected(self, service, event_factory):
        service.start()
        service.shutdown()
        assert service.publish_milestone(event_factory()) is None


@pytest.fixture(autouse=True)
def _no_trigger_left_behind():
    yield
    teardown_trigger()
