"""Twilio messaging integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class TwilioSettings(IntegrationSettings):
    """Twilio Programmable Messaging configuration (SMS and WhatsApp).

    Environment Variables:
        TWILIO_ACCOUNT_SID: Twilio account SID
        TWILIO_AUTH_TOKEN: Twilio auth token
        TWILIO_PHONE_NUMBER: E.164 sender number for SMS
        TWILIO_WHATSAPP_NUMBER: E.164 sender number for WhatsApp
            (defaults to TWILIO_PHONE_NUMBER when unset)
        TWILIO_API_URL: Twilio REST API base URL

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.twilio.is_configured:
            sender = settings.twilio.TWILIO_PHONE_NUMBER
        ```
    """

    TWILIO_ACCOUNT_SID: str | None = Field(default=None, alias="TWILIO_ACCOUNT_SID")
    TWILIO_AUTH_TOKEN: str | None = Field(default=None, alias="TWILIO_AUTH_TOKEN")
    TWILIO_PHONE_NUMBER: str | None = Field(default=None, alias="TWILIO_PHONE_NUMBER")
    TWILIO_WHATSAPP_NUMBER: str | None = Field(
        default=None, alias="TWILIO_WHATSAPP_NUMBER"
    )
    TWILIO_API_URL: str = Field(
        default="https://api.twilio.com/2010-04-01", alias="TWILIO_API_URL"
    )

    @property
    def is_configured(self) -> bool:
        """True when account credentials and a sender number are all present."""
        return bool(
            self.TWILIO_ACCOUNT_SID
            and self.TWILIO_AUTH_TOKEN
            and self.TWILIO_PHONE_NUMBER
        )

    @property
    def whatsapp_sender(self) -> str | None:
        """Sender number used for WhatsApp messages."""
        return self.TWILIO_WHATSAPP_NUMBER or self.TWILIO_PHONE_NUMBER
