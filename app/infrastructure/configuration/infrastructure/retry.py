"""Retry infrastructure settings."""

from pydantic import Field, model_validator

from infrastructure.configuration.base import InfrastructureSettings


class RetrySettings(InfrastructureSettings):
    """Per-hop retry configuration for the notification dispatcher.

    Retries apply only to transient transport failures of a single channel hop
    and happen before the dispatcher moves on to the next channel. With the
    default of one attempt, a failed hop falls through immediately.

    Environment Variables:
        RETRY_MAX_ATTEMPTS: Tries per channel hop, including the first (default: 1)
        RETRY_BASE_DELAY_SECONDS: Base exponential backoff delay (default: 1s)
        RETRY_MAX_DELAY_SECONDS: Maximum backoff delay (default: 8s)

    Exponential Backoff:
        Delay calculation: min(base_delay * (2 ^ retry_index), max_delay)

        Example with base=1s, max=8s:
            Retry 1: 1s
            Retry 2: 2s
            Retry 3: 4s
            Retry 4: 8s (capped for higher retries)
    """

    max_attempts: int = Field(
        default=1,
        alias="RETRY_MAX_ATTEMPTS",
        description="Tries per channel hop, including the first",
    )
    base_delay_seconds: float = Field(
        default=1.0,
        alias="RETRY_BASE_DELAY_SECONDS",
        description="Base delay for exponential backoff (seconds)",
    )
    max_delay_seconds: float = Field(
        default=8.0,
        alias="RETRY_MAX_DELAY_SECONDS",
        description="Maximum delay for exponential backoff (seconds)",
    )

    @model_validator(mode="after")
    def validate_bounds(self) -> "RetrySettings":
        if self.max_attempts < 1:
            raise ValueError("RETRY_MAX_ATTEMPTS must be at least 1")
        if self.max_delay_seconds < self.base_delay_seconds:
            raise ValueError("RETRY_MAX_DELAY_SECONDS must be >= RETRY_BASE_DELAY_SECONDS")
        return self
