"""Shared base classes for settings modules.

Every settings section loads from the process environment and an optional
`.env` file, with case-sensitive variable names, and ignores variables it
does not declare so sections can share one `.env` file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    case_sensitive=True,
    extra="ignore",
)


class IntegrationSettings(BaseSettings):
    """Base class for external provider settings (Twilio, SendGrid, Gemini).

    Provider credentials are optional: a section with missing credentials
    loads fine and reports `is_configured == False`.
    """

    model_config = _SECTION_CONFIG


class FeatureSettings(BaseSettings):
    """Base class for feature settings (the notification pipeline)."""

    model_config = _SECTION_CONFIG


class InfrastructureSettings(BaseSettings):
    """Base class for infrastructure-level settings.

    Infrastructure settings control core system behavior like retry logic
    and server configuration.
    """

    model_config = _SECTION_CONFIG
