"""Unit tests for notification models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from infrastructure.notifications.models import (
    DEFAULT_USER_NAME,
    TOTAL_FAILURE_MESSAGE,
    Channel,
    DeliveryAttempt,
    DeliveryOutcome,
    DispatchResult,
    MilestoneEvent,
    MilestoneKind,
    NotificationPreference,
    PreferenceUpdate,
)
from infrastructure.operations import OperationResult


@pytest.mark.unit
class TestNotificationPreference:
    def test_defaults(self):
        pref = NotificationPreference(user_id="u1")
        assert pref.preferred_channel == Channel.UNSET
        assert pref.reminders_enabled is False
        assert pref.updated_at.tzinfo is not None

    def test_sms_requires_e164_phone(self, preference_factory):
        pref = preference_factory(phone_number="0412345678")
        with pytest.raises(ValueError, match="E.164"):
            pref.validate_contact_invariant()

    def test_email_requires_plausible_email(self, preference_factory):
        pref = preference_factory(preferred_channel=Channel.EMAIL, email="jane@")
        with pytest.raises(ValueError):
            pref.validate_contact_invariant()

    def test_valid_preferences_pass(self, preference_factory):
        preference_factory().validate_contact_invariant()
        preference_factory(
            preferred_channel=Channel.EMAIL, phone_number=None
        ).validate_contact_invariant()
        NotificationPreference(user_id="u1").validate_contact_invariant()

    @pytest.mark.parametrize(
        "display_name,email,expected",
        [
            ("  Sam ", "sam@example.com", "Sam"),
            (None, "jane.doe@example.com", "jane.doe"),
            ("", None, DEFAULT_USER_NAME),
        ],
    )
    def test_resolved_user_name(self, preference_factory, display_name, email, expected):
        pref = preference_factory(display_name=display_name, email=email)
        assert pref.resolved_user_name() == expected


@pytest.mark.unit
class TestPreferenceUpdate:
    def test_rejects_non_e164_phone(self):
        with pytest.raises(ValidationError):
            PreferenceUpdate(phone_number="0412 345 678")

    def test_strips_phone(self):
        assert PreferenceUpdate(phone_number=" +61412345678 ").phone_number == "+61412345678"

    def test_rejects_invalid_email(self):
        with pytest.raises(ValidationError):
            PreferenceUpdate(email="not-an-email")

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            PreferenceUpdate(pager="123")

    def test_tracks_set_fields(self):
        update = PreferenceUpdate(reminders_enabled=True)
        assert update.model_dump(exclude_unset=True) == {"reminders_enabled": True}


@pytest.mark.unit
class TestMilestoneEvent:
    def test_naive_timestamp_treated_as_utc(self):
        event = MilestoneEvent(
            kind=MilestoneKind.INFO,
            raw_text="x",
            user_id="u1",
            timestamp=datetime(2026, 10, 17, 9, 0),
        )
        assert event.timestamp.tzinfo == timezone.utc

    def test_threshold_from_text(self, event_factory):
        assert event_factory(raw_text="You've reached 25% of your daily goal!").resolved_threshold() == 25

    def test_explicit_threshold_wins(self, event_factory):
        assert event_factory(raw_text="50% done", threshold_percent=75).resolved_threshold() == 75

    def test_achievement_defaults_to_100(self, event_factory):
        event = event_factory(kind=MilestoneKind.ACHIEVEMENT, raw_text="Goal reached!")
        assert event.resolved_threshold() == 100
        assert event.milestone_label() == "goal completion"

    def test_plain_reminder_has_no_threshold(self, event_factory):
        assert event_factory(raw_text="Time for a glass of water").resolved_threshold() is None

    def test_rejects_out_of_range_threshold(self, event_factory):
        with pytest.raises(ValidationError):
            event_factory(threshold_percent=150)

    def test_events_are_frozen(self, event_factory):
        event = event_factory()
        with pytest.raises(ValidationError):
            event.user_id = "other"


@pytest.mark.unit
class TestDeliveryOutcome:
    @pytest.mark.parametrize(
        "result,expected",
        [
            (OperationResult.success(), DeliveryOutcome.SUCCESS),
            (OperationResult.not_configured("no key"), DeliveryOutcome.CONFIG_ERROR),
            (
                OperationResult.permanent_error("bad", error_code="VALIDATION_ERROR"),
                DeliveryOutcome.VALIDATION_ERROR,
            ),
            (OperationResult.transient_error("503"), DeliveryOutcome.TRANSPORT_ERROR),
            (
                OperationResult.permanent_error("400", error_code="HTTP_400"),
                DeliveryOutcome.TRANSPORT_ERROR,
            ),
        ],
    )
    def test_from_result(self, result, expected):
        assert DeliveryOutcome.from_result(result) == expected


@pytest.mark.unit
class TestDispatchResult:
    def _attempt(self, channel, outcome):
        return DeliveryAttempt(
            channel=channel, target_address="t", message="m", outcome=outcome
        )

    def test_empty_result_has_no_user_message(self):
        result = DispatchResult()
        assert not result.is_success
        assert result.user_message is None

    def test_failure_has_single_generic_message(self):
        result = DispatchResult(
            attempts=[
                self._attempt(Channel.SMS, DeliveryOutcome.TRANSPORT_ERROR),
                self._attempt(Channel.WHATSAPP, DeliveryOutcome.CONFIG_ERROR),
            ]
        )
        assert result.user_message == TOTAL_FAILURE_MESSAGE
        assert result.channels_tried == [Channel.SMS, Channel.WHATSAPP]

    def test_config_error_without_attempts(self):
        result = DispatchResult(error=DeliveryOutcome.CONFIG_ERROR)
        assert result.user_message == TOTAL_FAILURE_MESSAGE

    def test_success(self):
        result = DispatchResult(
            delivered_via=Channel.EMAIL,
            attempts=[self._attempt(Channel.EMAIL, DeliveryOutcome.SUCCESS)],
        )
        assert result.is_success
        assert result.user_message is None
