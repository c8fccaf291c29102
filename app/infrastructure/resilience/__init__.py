"""Resilience patterns for outbound message transports.

Circuit breakers per channel and in-line retry of transient failures.
"""

from infrastructure.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState,
)
from infrastructure.resilience.retry import RetryPolicy, run_with_retry

__all__ = [
    # Circuit Breaker
    "CircuitBreaker",
    "CircuitBreakerOpenError",
    "CircuitState",
    # Retry
    "RetryPolicy",
    "run_with_retry",
]
