"""Notification channel implementations.

Available channels:
- TwilioMessageChannel: SMS and WhatsApp via Twilio
- SendGridEmailChannel: Email via SendGrid

ChannelSender wraps them behind one ``send(channel, target, message)`` call.
"""

from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.channels.email import SendGridEmailChannel
from infrastructure.notifications.channels.sender import ChannelSender
from infrastructure.notifications.channels.twilio import TwilioMessageChannel

__all__ = [
    "NotificationChannel",
    "TwilioMessageChannel",
    "SendGridEmailChannel",
    "ChannelSender",
]
