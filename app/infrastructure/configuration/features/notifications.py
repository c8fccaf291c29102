"""Notification feature settings."""

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings


class NotificationFeatureSettings(FeatureSettings):
    """Milestone notification pipeline configuration.

    Environment Variables:
        NOTIFY_COMPOSE_TIMEOUT_SECONDS: Upper bound for the personalization call
        NOTIFY_TRANSPORT_TIMEOUT_SECONDS: Upper bound for each channel transport call
        NOTIFY_MESSAGE_MAX_LENGTH: Cap applied to generated messages
        NOTIFY_HISTORY_MAX_ENTRIES: Message-center entries kept per user
        NOTIFY_DEDUP_WINDOW_SECONDS: Window for suppressing repeated reminders
            that carry no threshold
        NOTIFY_TIMEZONE: IANA timezone used for the per-day milestone reset
        NOTIFY_CIRCUIT_BREAKER_ENABLED: Wrap channel transports in circuit breakers
        NOTIFY_CIRCUIT_BREAKER_FAILURE_THRESHOLD: Consecutive failures before opening
        NOTIFY_CIRCUIT_BREAKER_TIMEOUT_SECONDS: Seconds before a half-open probe

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        timeout = settings.notifications.transport_timeout_seconds
        ```
    """

    compose_timeout_seconds: float = Field(
        default=5.0, alias="NOTIFY_COMPOSE_TIMEOUT_SECONDS"
    )
    transport_timeout_seconds: float = Field(
        default=10.0, alias="NOTIFY_TRANSPORT_TIMEOUT_SECONDS"
    )
    message_max_length: int = Field(default=300, alias="NOTIFY_MESSAGE_MAX_LENGTH")
    history_max_entries: int = Field(default=50, alias="NOTIFY_HISTORY_MAX_ENTRIES")
    dedup_window_seconds: int = Field(default=60, alias="NOTIFY_DEDUP_WINDOW_SECONDS")
    timezone: str = Field(default="UTC", alias="NOTIFY_TIMEZONE")
    circuit_breaker_enabled: bool = Field(
        default=True, alias="NOTIFY_CIRCUIT_BREAKER_ENABLED"
    )
    circuit_breaker_failure_threshold: int = Field(
        default=5, alias="NOTIFY_CIRCUIT_BREAKER_FAILURE_THRESHOLD"
    )
    circuit_breaker_timeout_seconds: int = Field(
        default=60, alias="NOTIFY_CIRCUIT_BREAKER_TIMEOUT_SECONDS"
    )

    @field_validator("compose_timeout_seconds", "transport_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Every remote call must have a positive upper bound."""
        if v <= 0:
            raise ValueError("timeouts must be greater than zero")
        return v

    @field_validator("message_max_length", "history_max_entries")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("value must be at least 1")
        return v
