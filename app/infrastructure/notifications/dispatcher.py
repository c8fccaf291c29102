"""Fallback dispatcher: walk a user's channel chain until one delivers.

Delivery is strictly sequential. Each hop starts only after the previous
one has resolved, no channel is tried twice, and the chain stops at the
first success. Per-channel failures are kept on the result for diagnostics;
the only user-facing failure is ``DispatchResult.user_message``.

Usage Example:
    from infrastructure.notifications import FallbackDispatcher

    dispatcher = FallbackDispatcher(sender, retry_policy=RetryPolicy(max_attempts=2))
    result = dispatcher.dispatch(preference, "Sam, halfway there!")

    if not result.is_success:
        show_toast(result.user_message)
"""

import time
from typing import Callable, Optional

import structlog

from infrastructure.notifications.channels.sender import ChannelSender, TRANSPORT_ERROR
from infrastructure.notifications.models import (
    Channel,
    DeliveryAttempt,
    DeliveryOutcome,
    DispatchResult,
    NotificationPreference,
    utc_now,
)
from infrastructure.notifications.policy import chain_for, contact_for
from infrastructure.operations import OperationResult
from infrastructure.resilience import RetryPolicy, run_with_retry

logger = structlog.get_logger()


class FallbackDispatcher:
    """Orchestrates ordered delivery across channels for one preference.

    Attributes:
        sender: ChannelSender used for every hop
        retry_policy: In-line retry of transient failures within a hop
            (default: one try per hop)

    Example:
        dispatcher = FallbackDispatcher(sender)
        result = dispatcher.dispatch(pref, message)
        logger.info("dispatched", via=result.delivered_via, tried=result.channels_tried)
    """

    def __init__(
        self,
        sender: ChannelSender,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.sender = sender
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep

    def dispatch(
        self, pref: Optional[NotificationPreference], message: str
    ) -> DispatchResult:
        """Deliver ``message`` according to ``pref``.

        Never raises.

        Args:
            pref: The user's preference record, or None if there is none
            message: Final text to send

        Returns:
            DispatchResult with every attempt in order
        """
        if pref is None or not pref.reminders_enabled:
            logger.debug(
                "dispatch_skipped",
                reason="no_preference" if pref is None else "reminders_disabled",
            )
            return DispatchResult()

        log = logger.bind(user_id=pref.user_id)
        result = DispatchResult()

        try:
            chain = chain_for(pref)
        except Exception as e:
            log.exception("fallback_chain_resolution_failed", error=str(e))
            return DispatchResult(error=DeliveryOutcome.CONFIG_ERROR)

        if not chain:
            log.warning(
                "no_usable_contact",
                preferred_channel=pref.preferred_channel.value,
                has_phone=pref.has_phone,
                has_email=pref.has_email,
            )
            result.error = DeliveryOutcome.CONFIG_ERROR
            return self._finish(result, log)

        tried = set()
        for channel in chain:
            if channel in tried:
                continue
            tried.add(channel)

            attempt = self._attempt(channel, contact_for(channel, pref) or "", message)
            result.attempts.append(attempt)

            if attempt.is_success:
                result.delivered_via = channel
                break

            log.info(
                "channel_attempt_failed",
                channel=channel.value,
                outcome=attempt.outcome.value,
                error=attempt.error_message,
                tries=attempt.tries,
            )

        return self._finish(result, log)

    def _attempt(self, channel: Channel, target: str, message: str) -> DeliveryAttempt:
        """Run one hop, including any in-line retries."""
        started_at = utc_now()

        def send_once() -> OperationResult:
            return self.sender.send(channel, target, message)

        try:
            op_result, tries = run_with_retry(send_once, self.retry_policy, self._sleep)
        except Exception as e:
            logger.exception("channel_attempt_exception", channel=channel.value)
            op_result = OperationResult.transient_error(
                f"{type(e).__name__}: {e}", error_code=TRANSPORT_ERROR
            )
            tries = 1

        outcome = DeliveryOutcome.from_result(op_result)
        return DeliveryAttempt(
            channel=channel,
            target_address=target,
            message=message,
            outcome=outcome,
            provider_ref=op_result.data_get("provider_ref") if op_result.is_success else None,
            error_message=None if op_result.is_success else op_result.message,
            tries=tries,
            attempted_at=started_at,
        )

    def _finish(self, result: DispatchResult, log) -> DispatchResult:
        if result.is_success:
            log.info(
                "notification_delivered",
                delivered_via=result.delivered_via.value,
                channels_tried=[c.value for c in result.channels_tried],
            )
        else:
            log.error(
                "notification_delivery_failed",
                user_message=result.user_message,
                error=result.error.value if result.error else None,
                failures=[
                    {
                        "channel": a.channel.value,
                        "outcome": a.outcome.value,
                        "error": a.error_message,
                    }
                    for a in result.attempts
                ],
            )
        return result
