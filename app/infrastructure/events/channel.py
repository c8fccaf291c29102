"""Typed in-process event channel.

An explicit publisher handle with its own subscriber list. Producers hold a
reference to the channel and subscribers register on it; there is no global
registry. Delivery is synchronous through ``publish`` or fire-and-forget on a
managed thread pool through ``publish_background``.
"""

import atexit
import weakref
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from typing import Any, Callable, Generic, List, Optional, TypeVar

from infrastructure.logging import get_module_logger

logger = get_module_logger()

T = TypeVar("T")

Handler = Callable[[T], Any]

# Channels still holding an executor at interpreter exit
_LIVE_CHANNELS: "weakref.WeakSet[EventChannel]" = weakref.WeakSet()


class EventChannel(Generic[T]):
    """Publish events of one type to the handlers subscribed to it.

    Args:
        name: Channel name used in log entries.
        max_workers: Size of the background thread pool.

    Example:
        milestones: EventChannel[MilestoneEvent] = EventChannel("milestones")
        unsubscribe = milestones.subscribe(trigger.handle)
        milestones.publish_background(event)
        ...
        unsubscribe()
        milestones.shutdown()
    """

    def __init__(self, name: str, max_workers: int = 4):
        self.name = name
        self.max_workers = max_workers
        self._handlers: List[Handler] = []
        self._handlers_lock = Lock()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = Lock()
        self._shutdown = False

    def subscribe(self, handler: Handler) -> Callable[[], None]:
        """Register a handler.

        Returns:
            A callable that removes this handler. Calling it twice is a no-op.
        """
        with self._handlers_lock:
            self._handlers.append(handler)
            total = len(self._handlers)
        logger.debug(
            "event_handler_subscribed",
            channel=self.name,
            handler=getattr(handler, "__name__", repr(handler)),
            total_handlers=total,
        )

        def unsubscribe() -> None:
            with self._handlers_lock:
                if handler in self._handlers:
                    self._handlers.remove(handler)

        return unsubscribe

    @property
    def handler_count(self) -> int:
        with self._handlers_lock:
            return len(self._handlers)

    def publish(self, event: T) -> List[Any]:
        """Deliver an event synchronously to every subscribed handler.

        A handler that raises is logged and skipped; the remaining handlers
        still run.

        Returns:
            Return values of the handlers that completed.
        """
        with self._handlers_lock:
            handlers = list(self._handlers)

        logger.debug(
            "publishing_event",
            channel=self.name,
            handler_count=len(handlers),
        )

        results = []
        for handler in handlers:
            try:
                results.append(handler(event))
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    channel=self.name,
                    handler=getattr(handler, "__name__", repr(handler)),
                    error=str(e),
                )
        return results

    def start(self) -> None:
        """Create the background executor ahead of the first publish."""
        self._get_or_create_executor()

    def _get_or_create_executor(self) -> Optional[ThreadPoolExecutor]:
        with self._executor_lock:
            if self._shutdown:
                return None
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix=f"events-{self.name}",
                )
                _LIVE_CHANNELS.add(self)
                logger.debug(
                    "created_event_executor",
                    channel=self.name,
                    max_workers=self.max_workers,
                )
            return self._executor

    def publish_background(self, event: T) -> Optional[Future]:
        """Submit ``publish(event)`` to the channel's thread pool.

        Returns:
            The Future for the submission, or None when the channel has been
            shut down or the submission failed.
        """
        executor = self._get_or_create_executor()
        if executor is None:
            logger.error("event_channel_closed", channel=self.name)
            return None
        try:
            return executor.submit(self.publish, event)
        except RuntimeError:
            logger.exception("failed_to_submit_event", channel=self.name)
            return None

    @property
    def is_shut_down(self) -> bool:
        with self._executor_lock:
            return self._shutdown

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting background events. Idempotent.

        Args:
            wait: If True, wait for pending background deliveries to finish.
        """
        with self._executor_lock:
            executor, self._executor = self._executor, None
            self._shutdown = True
        if executor is not None:
            executor.shutdown(wait=wait)
            logger.debug("event_executor_shut_down", channel=self.name, wait=wait)


@atexit.register
def _atexit_shutdown():
    """Best-effort shutdown at process exit."""
    for channel in list(_LIVE_CHANNELS):
        channel.shutdown(wait=False)
