"""Idempotency cache abstract base class."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IdempotencyCache(ABC):
    """Abstract base class for idempotency cache implementations.

    Records which notification-worthy events have already been handled so a
    duplicate trigger does not reach the user twice. Entries expire after a
    time-to-live, after which the same key may be claimed again.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Get cached value for idempotency key.

        Args:
            key: Idempotency key.

        Returns:
            Cached dict or None if not found/expired.
        """
        pass

    @abstractmethod
    def set(self, key: str, response: Dict[str, Any], ttl_seconds: float) -> None:
        """Cache a value for the given idempotency key, replacing any existing one.

        Args:
            key: Idempotency key.
            response: Dict to cache.
            ttl_seconds: Time-to-live in seconds.
        """
        pass

    @abstractmethod
    def set_if_absent(
        self, key: str, response: Dict[str, Any], ttl_seconds: float
    ) -> bool:
        """Atomically claim a key.

        Concurrent callers racing on the same key see exactly one ``True``.

        Args:
            key: Idempotency key.
            response: Dict to store with the claim.
            ttl_seconds: Time-to-live in seconds.

        Returns:
            True if the key was absent (or expired) and is now claimed,
            False if another live entry already holds it.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all cached entries (for testing)."""
        pass

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dict with cache statistics (implementation-specific).
        """
        pass
