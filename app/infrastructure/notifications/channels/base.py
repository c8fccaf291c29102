"""Notification channel abstract base class.

All channel implementations (SMS, WhatsApp, Email) must implement this interface.
"""

from abc import ABC, abstractmethod

from infrastructure.notifications.models import Channel
from infrastructure.operations import OperationResult


class NotificationChannel(ABC):
    """Abstract base class for notification channels.

    Each channel transmits one message to one address through a specific
    provider:
    - TwilioMessageChannel: SMS or WhatsApp through Twilio
    - SendGridEmailChannel: Email through SendGrid

    Target validation, configuration checks and circuit breaking are done by
    ChannelSender before ``deliver`` is called, so implementations only deal
    with the transport.

    Example Implementation:
        class LogOnlyChannel(NotificationChannel):

            @property
            def channel(self) -> Channel:
                return Channel.SMS

            @property
            def is_configured(self) -> bool:
                return True

            def deliver(self, target: str, message: str) -> OperationResult:
                logger.info("would_send", target=target)
                return OperationResult.success(data={"provider_ref": None})

            def health_check(self) -> OperationResult:
                return OperationResult.success()
    """

    @property
    @abstractmethod
    def channel(self) -> Channel:
        """Channel this implementation delivers on."""
        pass

    @property
    def channel_name(self) -> str:
        """Channel identifier used in logs."""
        return self.channel.value

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True when the provider credentials for this channel are present."""
        pass

    @abstractmethod
    def deliver(self, target: str, message: str) -> OperationResult:
        """Transmit one message.

        Must handle provider errors and return an error OperationResult
        rather than raising.

        Args:
            target: Validated phone number or email address
            message: Text to send

        Returns:
            OperationResult with ``{"provider_ref": ...}`` in data on success
        """
        pass

    @abstractmethod
    def health_check(self) -> OperationResult:
        """Check channel health (credentials present, client usable).

        Returns:
            OperationResult indicating channel health
        """
        pass
