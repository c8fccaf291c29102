"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.twilio import TwilioSettings
from infrastructure.configuration.integrations.sendgrid import SendGridSettings
from infrastructure.configuration.integrations.gemini import GeminiSettings

__all__ = [
    "TwilioSettings",
    "SendGridSettings",
    "GeminiSettings",
]
