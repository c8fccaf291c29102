"""Hydration Notify configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import (
    TwilioSettings,
    SendGridSettings,
    GeminiSettings,
)

# Feature settings
from infrastructure.configuration.features import NotificationFeatureSettings

# Infrastructure settings
from infrastructure.configuration.infrastructure import (
    RetrySettings,
    ServerSettings,
)


class Settings(BaseSettings):
    """Hydration Notify configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Integrations**: Message transports and text generation (Twilio, SendGrid, Gemini)
    - **Features**: Notification pipeline behaviour (timeouts, caps, dedup, timezone)
    - **Infrastructure**: Core system configurations (retry, server)

    Credentials are read once when the settings object is created. A missing
    credential never raises here; the affected channel reports CONFIG_ERROR.

    Environment Variables:
        PREFIX: Environment prefix for non-production deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.twilio.is_configured:
            ...

        timeout = settings.notifications.transport_timeout_seconds
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    twilio: TwilioSettings
    sendgrid: SendGridSettings
    gemini: GeminiSettings

    # Feature settings
    notifications: NotificationFeatureSettings

    # Infrastructure settings
    server: ServerSettings
    retry: RetrySettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Integrations
            "twilio": TwilioSettings,
            "sendgrid": SendGridSettings,
            "gemini": GeminiSettings,
            # Features
            "notifications": NotificationFeatureSettings,
            # Infrastructure
            "server": ServerSettings,
            "retry": RetrySettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
