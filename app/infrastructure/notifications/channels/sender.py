"""Uniform send capability over every configured channel.

ChannelSender is the only path from the dispatcher to a transport. For each
call it:
1. validates the target address for the channel (VALIDATION_ERROR, no call)
2. checks the channel exists and has credentials (CONFIG_ERROR, no call)
3. delivers through the channel's circuit breaker (TRANSPORT_ERROR on failure)

There is no retry here; retries belong to the dispatcher.
"""

from typing import Any, Dict, Iterable, Optional

import structlog

from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Channel
from infrastructure.notifications.validation import validate_target
from infrastructure.operations import OperationResult
from infrastructure.resilience import CircuitBreaker, CircuitBreakerOpenError

logger = structlog.get_logger()

VALIDATION_ERROR = "VALIDATION_ERROR"
CONFIG_ERROR = "CONFIG_ERROR"
TRANSPORT_ERROR = "TRANSPORT_ERROR"


class ChannelSender:
    """Send one message over one channel.

    Args:
        channels: Channel implementations; at most one per Channel value
        circuit_breakers: Optional breaker per channel

    Example:
        sender = ChannelSender(
            channels=[sms_channel, whatsapp_channel, email_channel],
            circuit_breakers={Channel.SMS: CircuitBreaker("SMS"), ...},
        )

        result = sender.send(Channel.SMS, "+61412345678", "Drink up!")
        if result.is_success:
            provider_ref = result.data_get("provider_ref")
    """

    def __init__(
        self,
        channels: Iterable[NotificationChannel],
        circuit_breakers: Optional[Dict[Channel, CircuitBreaker]] = None,
    ):
        self.channels: Dict[Channel, NotificationChannel] = {}
        for channel in channels:
            self.channels[channel.channel] = channel
        self.circuit_breakers = circuit_breakers or {}

        logger.info(
            "initialized_channel_sender",
            channels=[c.value for c in self.channels],
            configured=[c.value for c, impl in self.channels.items() if impl.is_configured],
            circuit_breakers=[c.value for c in self.circuit_breakers],
        )

    def send(self, channel: Channel, target: str, message: str) -> OperationResult:
        """Send ``message`` to ``target`` over ``channel``.

        Never raises.

        Returns:
            OperationResult with ``{"provider_ref": ...}`` on success. Failed
            results carry ``VALIDATION_ERROR`` or ``CONFIG_ERROR`` as the
            error code when no call was made; transport failures keep the
            provider's classification (transient or permanent).
        """
        log = logger.bind(channel=channel.value, target=target)

        reason = validate_target(channel.value, target)
        if reason is not None:
            log.warning("invalid_channel_target", reason=reason)
            return OperationResult.permanent_error(reason, error_code=VALIDATION_ERROR)

        impl = self.channels.get(channel)
        if impl is None or not impl.is_configured:
            log.warning("channel_not_configured")
            return OperationResult.not_configured(
                f"{channel.value} channel is not configured", error_code=CONFIG_ERROR
            )

        breaker = self.circuit_breakers.get(channel)
        try:
            if breaker is not None:
                result = breaker.call(impl.deliver, target, message)
            else:
                result = impl.deliver(target, message)
        except CircuitBreakerOpenError as e:
            log.warning("channel_circuit_open", error=str(e))
            return OperationResult.permanent_error(str(e), error_code="CIRCUIT_OPEN")
        except Exception as e:
            log.exception("channel_delivery_exception", error=str(e))
            return OperationResult.transient_error(
                f"{channel.value} delivery raised {type(e).__name__}: {e}",
                error_code=TRANSPORT_ERROR,
            )

        if result.is_success:
            log.info("channel_delivery_succeeded")
        else:
            log.warning(
                "channel_delivery_failed",
                error=result.message,
                error_code=result.error_code,
            )
        return result

    def health_check(self) -> Dict[str, bool]:
        """Report per-channel readiness for every known channel."""
        health = {}
        for channel in (Channel.SMS, Channel.WHATSAPP, Channel.EMAIL):
            impl = self.channels.get(channel)
            if impl is None:
                health[channel.value] = False
                continue
            try:
                health[channel.value] = impl.health_check().is_success
            except Exception as e:
                logger.error(
                    "channel_health_check_failed", channel=channel.value, error=str(e)
                )
                health[channel.value] = False
        return health

    def circuit_breaker_stats(self) -> Dict[str, Dict[str, Any]]:
        """Breaker state and counters per channel that has a breaker."""
        return {
            channel.value: breaker.get_stats()
            for channel, breaker in self.circuit_breakers.items()
        }
