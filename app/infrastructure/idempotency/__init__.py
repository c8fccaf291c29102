"""Infrastructure idempotency cache.

Keeps a duplicate milestone or reminder trigger from notifying a user twice.

Usage:

    from infrastructure.idempotency import (
        IdempotencyKeyBuilder,
        InMemoryIdempotencyCache,
    )

    cache = InMemoryIdempotencyCache()
    key = IdempotencyKeyBuilder("milestones").build(
        "notify", user_id="user-1", threshold=50, local_date="2026-10-17"
    )

    if cache.set_if_absent(key, {"event_id": "..."}, ttl_seconds=3600):
        ...  # first time today
"""

from infrastructure.idempotency.cache import IdempotencyCache
from infrastructure.idempotency.memory import InMemoryIdempotencyCache
from infrastructure.idempotency.key_builder import IdempotencyKeyBuilder

__all__ = [
    "IdempotencyCache",
    "InMemoryIdempotencyCache",
    "IdempotencyKeyBuilder",
]
