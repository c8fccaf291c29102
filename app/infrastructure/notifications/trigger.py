"""Notification trigger: milestone events in, at most one dispatch out.

The trigger owns the process's milestone EventChannel. For every event it
records a message-center entry; REMINDER and ACHIEVEMENT events then go
through composer and dispatcher at most once per ``(user, threshold, local
date)``. Threshold claims expire at the next local midnight in the
configured timezone, so the same threshold can fire again the next day.

Usage:
    from infrastructure.notifications.trigger import init_trigger, get_trigger

    init_trigger(NotificationTrigger(composer, dispatcher, store, cache, history))
    get_trigger().publish(event)
    ...
    teardown_trigger()
"""

import threading
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable, Optional
from zoneinfo import ZoneInfo

from infrastructure.events import EventChannel
from infrastructure.idempotency import IdempotencyCache, IdempotencyKeyBuilder
from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.notifications.composer import MessageComposer
from infrastructure.notifications.dispatcher import FallbackDispatcher
from infrastructure.notifications.history import HistoryEntry, MessageHistory
from infrastructure.notifications.models import (
    DispatchResult,
    MilestoneEvent,
    MilestoneKind,
)

if TYPE_CHECKING:
    from concurrent.futures import Future
    from modules.preferences import PreferenceStore

logger = get_module_logger()

NOTIFIABLE_KINDS = (MilestoneKind.REMINDER, MilestoneKind.ACHIEVEMENT)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def seconds_until_next_midnight(now: datetime, tz: ZoneInfo) -> float:
    """Seconds from ``now`` to the next midnight in ``tz``."""
    local_now = now.astimezone(tz)
    next_day = (local_now + timedelta(days=1)).date()
    midnight = datetime(next_day.year, next_day.month, next_day.day, tzinfo=tz)
    return (midnight - local_now).total_seconds()


class NotificationTrigger:
    """Consume milestone events and notify each user at most once per milestone.

    Args:
        composer: Produces the message text
        dispatcher: Walks the user's fallback chain
        preference_store: Source of reminder preferences
        dedup_cache: Shared claim store; must support atomic set_if_absent
        history: Message-center history
        channel: Event channel to subscribe to (created and owned if omitted)
        timezone_name: IANA timezone whose midnight resets threshold claims
        dedup_window_seconds: Claim lifetime for events without a threshold
        clock: Returns the current aware datetime, injectable for tests
    """

    def __init__(
        self,
        composer: MessageComposer,
        dispatcher: FallbackDispatcher,
        preference_store: "PreferenceStore",
        dedup_cache: IdempotencyCache,
        history: MessageHistory,
        channel: Optional[EventChannel[MilestoneEvent]] = None,
        timezone_name: str = "UTC",
        dedup_window_seconds: float = 60,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.composer = composer
        self.dispatcher = dispatcher
        self.preference_store = preference_store
        self.dedup_cache = dedup_cache
        self.history = history
        self._owns_channel = channel is None
        self.channel: EventChannel[MilestoneEvent] = channel or EventChannel("milestones")
        self.timezone = ZoneInfo(timezone_name)
        self.dedup_window_seconds = dedup_window_seconds
        self._clock = clock
        self._keys = IdempotencyKeyBuilder(namespace="milestones")
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._closed = False
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._unsubscribe is not None and not self._closed

    @property
    def is_closed(self) -> bool:
        with self._lock:
            return self._closed

    def start(self) -> None:
        """Subscribe to the event channel. Calling it twice is a no-op."""
        with self._lock:
            if self._closed:
                raise RuntimeError("NotificationTrigger has been shut down")
            if self._unsubscribe is not None:
                return
            self._unsubscribe = self.channel.subscribe(self.handle)
        self.channel.start()
        logger.info(
            "notification_trigger_started",
            channel=self.channel.name,
            timezone=str(self.timezone),
        )

    def shutdown(self, wait: bool = True) -> None:
        """Unsubscribe and close. Dispatches still in flight are discarded."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
        if self._owns_channel:
            self.channel.shutdown(wait=wait)
        logger.info("notification_trigger_shut_down")

    def publish(self, event: MilestoneEvent) -> Optional["Future"]:
        """Publish an event on the trigger's channel in the background."""
        return self.channel.publish_background(event)

    def handle(self, event: MilestoneEvent) -> Optional[DispatchResult]:
        """Process one event. Never raises.

        Returns:
            The DispatchResult, or None when nothing was dispatched or the
            trigger shut down before the dispatch finished.
        """
        with bind_request_context(user_id=event.user_id, event_id=str(event.event_id)):
            try:
                return self._handle(event)
            except Exception as e:
                logger.exception("milestone_event_failed", error=str(e))
                return None

    def _handle(self, event: MilestoneEvent) -> Optional[DispatchResult]:
        if self.is_closed:
            logger.info("milestone_event_ignored", reason="trigger_closed")
            return None

        self.history.append(event.user_id, HistoryEntry.from_event(event))

        if event.kind not in NOTIFIABLE_KINDS:
            return None

        pref = self.preference_store.get_preference(event.user_id)
        if pref is None or not pref.reminders_enabled:
            logger.info(
                "milestone_notification_skipped",
                reason="no_preference" if pref is None else "reminders_disabled",
            )
            return None

        if not self._claim(event):
            logger.info(
                "duplicate_milestone_suppressed",
                threshold=event.resolved_threshold(),
                kind=event.kind.value,
            )
            return None

        message = self.composer.compose(
            pref.resolved_user_name(), event.milestone_label(), pref.tone.value
        )
        result = self.dispatcher.dispatch(pref, message)

        if self.is_closed:
            logger.info(
                "dispatch_result_discarded",
                delivered_via=result.delivered_via.value if result.delivered_via else None,
            )
            return None

        if not result.is_success:
            logger.error(
                "milestone_notification_failed",
                user_message=result.user_message,
                channels_tried=[c.value for c in result.channels_tried],
            )
        return result

    def _claim(self, event: MilestoneEvent) -> bool:
        """Atomically claim the event's dedup key."""
        threshold = event.resolved_threshold()
        if threshold is not None:
            local_date = event.timestamp.astimezone(self.timezone).date()
            key = self._keys.build(
                "notify",
                user_id=event.user_id,
                threshold=threshold,
                local_date=local_date.isoformat(),
            )
            now = self._clock()
            ttl = seconds_until_next_midnight(now, self.timezone)
            if now.astimezone(self.timezone).date() != local_date:
                # Late event from another day still blocks re-sends briefly.
                ttl = self.dedup_window_seconds
        else:
            key = self._keys.build(
                "notify",
                user_id=event.user_id,
                kind=event.kind.value,
                raw_text=event.raw_text,
            )
            ttl = self.dedup_window_seconds

        return self.dedup_cache.set_if_absent(
            key, {"event_id": str(event.event_id)}, ttl_seconds=max(ttl, 1)
        )


_TRIGGER: Optional[NotificationTrigger] = None
_trigger_lock = threading.Lock()


def init_trigger(trigger: NotificationTrigger) -> NotificationTrigger:
    """Install and start the process-wide trigger.

    A previously installed trigger is shut down first.
    """
    global _TRIGGER
    with _trigger_lock:
        previous, _TRIGGER = _TRIGGER, trigger
    if previous is not None and previous is not trigger:
        logger.warning("replacing_notification_trigger")
        previous.shutdown(wait=False)
    trigger.start()
    return trigger


def get_trigger() -> NotificationTrigger:
    """The process-wide trigger.

    Raises:
        RuntimeError: When init_trigger() has not been called.
    """
    with _trigger_lock:
        trigger = _TRIGGER
    if trigger is None:
        raise RuntimeError("Notification trigger is not initialized")
    return trigger


def teardown_trigger(wait: bool = True) -> None:
    """Shut down and remove the process-wide trigger. Idempotent."""
    global _TRIGGER
    with _trigger_lock:
        trigger, _TRIGGER = _TRIGGER, None
    if trigger is not None:
        trigger.shutdown(wait=wait)
