"""Unit tests for the per-channel circuit breaker."""

import pytest

from infrastructure.operations import OperationResult
from infrastructure.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState,
)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def _raise(exc):
    raise exc


@pytest.fixture
def clock():
    return FakeClock()


@pytest.mark.unit
class TestCircuitBreakerInitialization:
    def test_starts_in_closed_state(self):
        cb = CircuitBreaker("test", failure_threshold=3, timeout_seconds=60)
        assert cb.state == CircuitState.CLOSED

    def test_default_configuration(self):
        cb = CircuitBreaker("test")
        assert cb.failure_threshold == 5
        assert cb.timeout_seconds == 60
        assert cb.half_open_max_calls == 1

    def test_initializes_with_zero_stats(self):
        stats = CircuitBreaker("test").get_stats()
        assert stats["failure_count"] == 0
        assert stats["state"] == "closed"


@pytest.mark.unit
class TestCircuitBreakerClosedState:
    def test_allows_successful_calls(self):
        cb = CircuitBreaker("test", failure_threshold=3)
        assert cb.call(lambda: "ok") == "ok"
        assert cb.state == CircuitState.CLOSED

    def test_opens_after_consecutive_exceptions(self, clock):
        cb = CircuitBreaker("test", failure_threshold=2, clock=clock)
        for _ in range(2):
            with pytest.raises(RuntimeError):
                cb.call(_raise, RuntimeError("down"))
        assert cb.state == CircuitState.OPEN

    def test_success_resets_failure_count(self):
        cb = CircuitBreaker("test", failure_threshold=3)
        with pytest.raises(RuntimeError):
            cb.call(_raise, RuntimeError("down"))
        cb.call(lambda: "ok")
        assert cb.get_stats()["failure_count"] == 0

    def test_returned_failures_count_when_predicate_matches(self, clock):
        cb = CircuitBreaker(
            "sms",
            failure_threshold=2,
            is_failure=lambda r: r.is_transient,
            clock=clock,
        )
        failure = OperationResult.transient_error("HTTP 503", error_code="HTTP_503")

        assert cb.call(lambda: failure) is failure
        assert cb.state == CircuitState.CLOSED
        cb.call(lambda: failure)
        assert cb.state == CircuitState.OPEN

    def test_returned_values_ignored_without_predicate(self):
        cb = CircuitBreaker("test", failure_threshold=1)
        cb.call(lambda: OperationResult.transient_error("x"))
        assert cb.state == CircuitState.CLOSED


@pytest.mark.unit
class TestCircuitBreakerOpenState:
    def test_rejects_calls_while_open(self, clock):
        cb = CircuitBreaker("test", failure_threshold=1, timeout_seconds=30, clock=clock)
        with pytest.raises(RuntimeError):
            cb.call(_raise, RuntimeError("down"))

        calls = []
        with pytest.raises(CircuitBreakerOpenError):
            cb.call(lambda: calls.append(1))
        assert calls == []

    def test_half_open_probe_after_timeout_closes_on_success(self, clock):
        cb = CircuitBreaker("test", failure_threshold=1, timeout_seconds=30, clock=clock)
        with pytest.raises(RuntimeError):
            cb.call(_raise, RuntimeError("down"))

        clock.now += 31
        assert cb.call(lambda: "ok") == "ok"
        assert cb.state == CircuitState.CLOSED

    def test_half_open_probe_failure_reopens(self, clock):
        cb = CircuitBreaker("test", failure_threshold=1, timeout_seconds=30, clock=clock)
        with pytest.raises(RuntimeError):
            cb.call(_raise, RuntimeError("down"))

        clock.now += 31
        with pytest.raises(RuntimeError):
            cb.call(_raise, RuntimeError("still down"))
        assert cb.state == CircuitState.OPEN

    def test_reset_closes_circuit(self, clock):
        cb = CircuitBreaker("test", failure_threshold=1, clock=clock)
        with pytest.raises(RuntimeError):
            cb.call(_raise, RuntimeError("down"))
        cb.reset()
        assert cb.state == CircuitState.CLOSED

