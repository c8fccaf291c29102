"""Notification service for dependency injection.

Builds the whole milestone notification pipeline from settings and exposes
it through one class-based interface for the API layer and for tests.
"""

from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

import requests
import structlog

from infrastructure.clients.gemini import GeminiClient
from infrastructure.clients.sendgrid import SendGridClient
from infrastructure.clients.twilio import TwilioClient
from infrastructure.events import EventChannel
from infrastructure.idempotency import IdempotencyCache, InMemoryIdempotencyCache
from infrastructure.notifications.channels import (
    ChannelSender,
    NotificationChannel,
    SendGridEmailChannel,
    TwilioMessageChannel,
)
from infrastructure.notifications.composer import MessageComposer, TextGenerator
from infrastructure.notifications.dispatcher import FallbackDispatcher
from infrastructure.notifications.history import MessageHistory
from infrastructure.notifications.models import (
    Channel,
    DispatchResult,
    MilestoneEvent,
    NotificationPreference,
    PreferenceUpdate,
)
from infrastructure.notifications.trigger import (
    NotificationTrigger,
    get_trigger,
    init_trigger,
    teardown_trigger,
)
from infrastructure.operations import OperationResult
from infrastructure.persistence import InMemoryKeyValueStore, KeyValueStore
from infrastructure.resilience import CircuitBreaker, RetryPolicy

if TYPE_CHECKING:
    from concurrent.futures import Future
    from infrastructure.configuration import Settings
    from modules.preferences import PreferenceStore

logger = structlog.get_logger()

REMINDER_LABEL = "regular reminder"


def _is_transport_failure(result: OperationResult) -> bool:
    return isinstance(result, OperationResult) and result.is_transient


class NotificationService:
    """Class-based notification service.

    Thin facade over composer, sender, dispatcher and trigger. Collaborators
    not passed in are built from settings.

    Usage:
        # Via dependency injection
        from infrastructure.services import NotificationServiceDep

        @router.post("/reminders/send")
        def send(service: NotificationServiceDep, body: SendReminderRequest):
            result = service.send_reminder(body.user_id)
            return {"deliveredVia": result.delivered_via}

        # Direct instantiation
        service = NotificationService(settings, preference_store=store)
        service.start()
    """

    def __init__(
        self,
        settings: "Settings",
        preference_store: "PreferenceStore",
        history_store: Optional[KeyValueStore] = None,
        dedup_cache: Optional[IdempotencyCache] = None,
        text_generator: Optional[TextGenerator] = None,
        channels: Optional[Iterable[NotificationChannel]] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize notification service.

        Args:
            settings: Settings instance (required, passed from provider).
            preference_store: Source of reminder preferences.
            history_store: Key-value store for the message center.
            dedup_cache: Claim store for milestone deduplication.
            text_generator: Personalization backend (default: Gemini).
            channels: Channel implementations (default: Twilio SMS/WhatsApp
                and SendGrid email).
            session: Shared requests.Session for the default clients.
        """
        notify = settings.notifications
        self._settings = settings
        self.preference_store = preference_store

        if text_generator is None:
            text_generator = GeminiClient(settings, session=session)
        self.composer = MessageComposer(text_generator, max_length=notify.message_max_length)

        if channels is None:
            twilio = TwilioClient(settings, session=session)
            channels = [
                TwilioMessageChannel(Channel.SMS, twilio),
                TwilioMessageChannel(Channel.WHATSAPP, twilio),
                SendGridEmailChannel(SendGridClient(settings, session=session)),
            ]
        channels = list(channels)

        self.sender = ChannelSender(channels, circuit_breakers=self._build_breakers(channels))
        self.dispatcher = FallbackDispatcher(
            self.sender, retry_policy=RetryPolicy.from_settings(settings.retry)
        )
        self.history = MessageHistory(
            history_store or InMemoryKeyValueStore(),
            max_entries=notify.history_max_entries,
        )
        self.trigger = NotificationTrigger(
            composer=self.composer,
            dispatcher=self.dispatcher,
            preference_store=preference_store,
            dedup_cache=dedup_cache or InMemoryIdempotencyCache(),
            history=self.history,
            channel=EventChannel(
                "milestones", max_workers=settings.server.BACKGROUND_WORKERS
            ),
            timezone_name=notify.timezone,
            dedup_window_seconds=notify.dedup_window_seconds,
        )

    def _build_breakers(
        self, channels: Iterable[NotificationChannel]
    ) -> Dict[Channel, CircuitBreaker]:
        notify = self._settings.notifications
        if not notify.circuit_breaker_enabled:
            return {}
        breakers = {}
        for impl in channels:
            breaker = CircuitBreaker(
                name=f"notification_{impl.channel_name.lower()}",
                failure_threshold=notify.circuit_breaker_failure_threshold,
                timeout_seconds=notify.circuit_breaker_timeout_seconds,
                is_failure=_is_transport_failure,
            )
            breakers[impl.channel] = breaker
        return breakers

    def start(self) -> None:
        """Install this service's trigger as the process-wide trigger."""
        init_trigger(self.trigger)

    def shutdown(self) -> None:
        """Stop the trigger and release its worker threads. Idempotent."""
        try:
            installed = get_trigger()
        except RuntimeError:
            installed = None
        if installed is self.trigger:
            teardown_trigger()
        else:
            self.trigger.shutdown()
        self.trigger.channel.shutdown()

    def personalize(
        self, user_name: str, milestone_label: str, tone: Optional[str] = None
    ) -> str:
        """Compose a message; falls back to the local templates on failure."""
        return self.composer.compose(user_name, milestone_label, tone)

    def get_preference(self, user_id: str) -> Optional[NotificationPreference]:
        return self.preference_store.get_preference(user_id)

    def save_preference(
        self, user_id: str, update: PreferenceUpdate
    ) -> NotificationPreference:
        return self.preference_store.save_preference(user_id, update)

    def send_reminder(
        self, pref: NotificationPreference, message: Optional[str] = None
    ) -> DispatchResult:
        """Dispatch a reminder for a preference.

        Args:
            pref: Preference to deliver to
            message: Text to send; composed from the preference when omitted
        """
        if not message or not message.strip():
            message = self.composer.compose(
                pref.resolved_user_name(), REMINDER_LABEL, pref.tone.value
            )
        return self.dispatcher.dispatch(pref, message.strip())

    def publish_milestone(self, event: MilestoneEvent) -> Optional["Future"]:
        """Hand an event to the trigger's channel for background processing."""
        return self.trigger.publish(event)

    def health_check(self) -> Dict[str, bool]:
        return self.sender.health_check()

    def circuit_breaker_stats(self) -> Dict[str, Dict[str, Any]]:
        return self.sender.circuit_breaker_stats()
