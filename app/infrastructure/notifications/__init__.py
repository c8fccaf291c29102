"""Milestone notification pipeline.

Composes a personalized message and delivers it over SMS, WhatsApp or
Email with ordered fallback:
- MessageComposer: remote personalization with deterministic local templates
- ChannelSender: one ``send(channel, target, message)`` over every transport
- FallbackDispatcher: walks SMS -> WhatsApp -> Email until one delivers
- NotificationTrigger: milestone events in, at most one dispatch per
  ``(user, threshold, local date)``

Usage:
    from infrastructure.notifications import (
        FallbackDispatcher,
        MilestoneEvent,
        MilestoneKind,
    )

    result = dispatcher.dispatch(preference, "Sam, halfway there!")
    if not result.is_success:
        logger.warning("reminder_failed", user_message=result.user_message)
"""

# Models
from infrastructure.notifications.models import (
    Channel,
    DeliveryAttempt,
    DeliveryOutcome,
    DispatchResult,
    MilestoneEvent,
    MilestoneKind,
    NotificationPreference,
    PreferenceUpdate,
    ReminderFrequency,
    ReminderTone,
)

# Composer
from infrastructure.notifications.composer import MessageComposer, fallback_message

# Channels
from infrastructure.notifications.channels import (
    ChannelSender,
    NotificationChannel,
    SendGridEmailChannel,
    TwilioMessageChannel,
)

# Dispatcher
from infrastructure.notifications.dispatcher import FallbackDispatcher
from infrastructure.notifications.policy import FALLBACK_CHAINS

# Trigger and history
from infrastructure.notifications.history import HistoryEntry, MessageHistory
from infrastructure.notifications.trigger import (
    NotificationTrigger,
    get_trigger,
    init_trigger,
    teardown_trigger,
)

# Service
from infrastructure.notifications.service import NotificationService

__all__ = [
    # Models
    "Channel",
    "DeliveryAttempt",
    "DeliveryOutcome",
    "DispatchResult",
    "MilestoneEvent",
    "MilestoneKind",
    "NotificationPreference",
    "PreferenceUpdate",
    "ReminderFrequency",
    "ReminderTone",
    # Composer
    "MessageComposer",
    "fallback_message",
    # Channels
    "ChannelSender",
    "NotificationChannel",
    "SendGridEmailChannel",
    "TwilioMessageChannel",
    # Dispatcher
    "FallbackDispatcher",
    "FALLBACK_CHAINS",
    # Trigger and history
    "HistoryEntry",
    "MessageHistory",
    "NotificationTrigger",
    "get_trigger",
    "init_trigger",
    "teardown_trigger",
    # Service
    "NotificationService",
]
