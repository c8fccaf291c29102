"""SendGrid email integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class SendGridSettings(IntegrationSettings):
    """SendGrid v3 Mail Send configuration.

    Environment Variables:
        SENDGRID_API_KEY: SendGrid API key
        SENDER_EMAIL: From address for reminder emails
        SENDGRID_API_URL: SendGrid API base URL
    """

    SENDGRID_API_KEY: str | None = Field(default=None, alias="SENDGRID_API_KEY")
    SENDER_EMAIL: str = Field(default="hydration@example.com", alias="SENDER_EMAIL")
    SENDGRID_API_URL: str = Field(
        default="https://api.sendgrid.com/v3", alias="SENDGRID_API_URL"
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.SENDGRID_API_KEY)
