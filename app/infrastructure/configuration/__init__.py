"""Infrastructure configuration module - public API.

This module provides centralized configuration management for Hydration
Notify using Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    RetrySettings: Retry settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    sender = settings.twilio.TWILIO_PHONE_NUMBER
    cap = settings.notifications.message_max_length
    retries = settings.retry.max_attempts
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure.retry import RetrySettings

__all__ = ["Settings", "RetrySettings"]
