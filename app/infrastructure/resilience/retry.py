"""In-line retry of a single channel attempt.

A channel is never re-entered later in the fallback chain. Retries of a
transient transport failure happen here, inside the one attempt for that
channel, and the number of tries is reported back to the caller.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from infrastructure.configuration import RetrySettings
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult

logger = get_module_logger()


@dataclass
class RetryPolicy:
    """Configuration for in-line retry behavior.

    Attributes:
        max_attempts: Total tries per channel, including the first one
        base_delay_seconds: Delay before the first retry
        max_delay_seconds: Cap for the exponential backoff

    Example:
        # One try per channel (no retry)
        policy = RetryPolicy()

        # Up to three tries with 0.5s, 1s backoff
        policy = RetryPolicy(max_attempts=3, base_delay_seconds=0.5)
    """

    max_attempts: int = 1
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 8.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_seconds < 0:
            raise ValueError("base_delay_seconds must not be negative")
        if self.max_delay_seconds < self.base_delay_seconds:
            raise ValueError("max_delay_seconds must be >= base_delay_seconds")

    @classmethod
    def from_settings(cls, settings: RetrySettings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.max_attempts,
            base_delay_seconds=settings.base_delay_seconds,
            max_delay_seconds=settings.max_delay_seconds,
        )

    def delay_for(self, retry_index: int, retry_after: Optional[float] = None) -> float:
        """Backoff before retry number ``retry_index`` (0-based).

        A provider ``retry_after`` hint raises the delay but never past
        ``max_delay_seconds``.
        """
        delay = self.base_delay_seconds * (2**retry_index)
        if retry_after:
            delay = max(delay, retry_after)
        return min(delay, self.max_delay_seconds)


def run_with_retry(
    func: Callable[[], OperationResult],
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> Tuple[OperationResult, int]:
    """Call ``func`` until it succeeds, fails permanently or runs out of tries.

    Only transient failures are retried.

    Args:
        func: Zero-argument callable returning an OperationResult
        policy: Retry configuration
        sleep: Sleep function, injectable for tests

    Returns:
        Tuple of (last result, number of tries made)
    """
    tries = 0
    while True:
        tries += 1
        result = func()
        if result.is_success or not result.is_transient:
            return result, tries
        if tries >= policy.max_attempts:
            return result, tries

        delay = policy.delay_for(tries - 1, result.retry_after)
        logger.info(
            "retrying_transient_failure",
            try_number=tries,
            max_attempts=policy.max_attempts,
            delay_seconds=delay,
            error_code=result.error_code,
        )
        sleep(delay)
