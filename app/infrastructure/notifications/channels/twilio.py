"""SMS and WhatsApp channels using Twilio."""

import structlog

from infrastructure.clients.twilio import TwilioClient
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Channel
from infrastructure.operations import OperationResult

logger = structlog.get_logger()


class TwilioMessageChannel(NotificationChannel):
    """Twilio-backed channel for SMS or WhatsApp.

    Both channels share one TwilioClient; the WhatsApp instance asks the
    client to prefix addresses with ``whatsapp:``.

    Args:
        channel: Channel.SMS or Channel.WHATSAPP
        client: Shared Twilio client
    """

    def __init__(self, channel: Channel, client: TwilioClient):
        if channel not in (Channel.SMS, Channel.WHATSAPP):
            raise ValueError(f"Twilio cannot deliver on {channel.value}")
        self._channel = channel
        self._client = client
        logger.info(
            "initialized_twilio_channel",
            channel=channel.value,
            configured=client.is_configured,
        )

    @property
    def channel(self) -> Channel:
        return self._channel

    @property
    def is_configured(self) -> bool:
        return self._client.is_configured

    def deliver(self, target: str, message: str) -> OperationResult:
        result = self._client.send_message(
            to=target,
            body=message,
            whatsapp=self._channel == Channel.WHATSAPP,
        )
        if not result.is_success:
            return result
        return OperationResult.success(
            data={"provider_ref": result.data_get("sid")},
            message=f"Sent {self.channel_name} message",
        )

    def health_check(self) -> OperationResult:
        if not self.is_configured:
            return OperationResult.not_configured(
                f"{self.channel_name} channel has no Twilio credentials"
            )
        return OperationResult.success(message=f"{self.channel_name} channel ready")
