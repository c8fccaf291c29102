"""Email channel implementation using SendGrid."""

import html

import structlog

from infrastructure.clients.sendgrid import SendGridClient
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Channel
from infrastructure.operations import OperationResult

logger = structlog.get_logger()

EMAIL_SUBJECT = "💧 Hydration Reminder"

HTML_TEMPLATE = (
    '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; '
    'padding: 20px; background-color: #f4f9ff; border-radius: 10px;">'
    '<div style="text-align: center; padding-bottom: 20px; border-bottom: 1px solid #cce3ff;">'
    '<h1 style="color: #0066cc; margin: 0;">💧 Hydration Reminder</h1>'
    "</div>"
    '<div style="padding: 20px 0;">'
    '<p style="font-size: 18px; line-height: 1.6; color: #444;">{message}</p>'
    "</div>"
    '<div style="background-color: #e6f2ff; padding: 15px; border-radius: 5px; margin-top: 20px;">'
    '<p style="margin: 0; color: #0066cc; font-size: 14px;">'
    "Stay hydrated for better health, focus, and energy throughout your day!</p>"
    "</div>"
    '<div style="text-align: center; margin-top: 30px; font-size: 12px; color: #888;">'
    "<p>This is an automated reminder from your Hydration Tracker app.</p>"
    "</div>"
    "</div>"
)


def render_html(message: str) -> str:
    """Wrap a reminder in the email HTML layout, escaping the text."""
    return HTML_TEMPLATE.format(message=html.escape(message))


class SendGridEmailChannel(NotificationChannel):
    """Email notification channel using SendGrid.

    Sends a plain text body and an HTML body with the same reminder text.
    """

    def __init__(self, client: SendGridClient):
        self._client = client
        logger.info(
            "initialized_email_channel",
            backend="sendgrid",
            configured=client.is_configured,
        )

    @property
    def channel(self) -> Channel:
        return Channel.EMAIL

    @property
    def is_configured(self) -> bool:
        return self._client.is_configured

    def deliver(self, target: str, message: str) -> OperationResult:
        result = self._client.send_email(
            to=target,
            subject=EMAIL_SUBJECT,
            text_body=message,
            html_body=render_html(message),
        )
        if not result.is_success:
            return result
        return OperationResult.success(
            data={"provider_ref": result.data_get("message_id")},
            message="Sent email",
        )

    def health_check(self) -> OperationResult:
        if not self.is_configured:
            return OperationResult.not_configured("Email channel has no SendGrid API key")
        return OperationResult.success(message="Email channel ready")
