"""Idempotency key builder for consistent key generation."""

import hashlib
from typing import Any


class IdempotencyKeyBuilder:
    """Build deterministic idempotency keys.

    Provides consistent key format across all features with namespace
    isolation and collision prevention.

    Example:
        >>> builder = IdempotencyKeyBuilder(namespace="milestones")
        >>> key = builder.build(
        ...     operation="notify",
        ...     user_id="user-1",
        ...     threshold=50,
        ...     local_date="2026-10-17",
        ... )
        >>> key
        'milestones:notify:a1b2c3d4e5f6g7h8'
    """

    def __init__(self, namespace: str):
        """Initialize key builder.

        Args:
            namespace: Namespace for key isolation (e.g., "milestones")
        """
        self.namespace = namespace

    def build(self, operation: str, **components: Any) -> str:
        """Build idempotency key from components.

        Args:
            operation: Operation type (e.g., "notify")
            **components: Key components (user_id, threshold, local_date, etc.)

        Returns:
            Idempotency key string
        """
        sorted_components = sorted(components.items())

        key_parts = [self.namespace, operation]
        key_parts.extend(f"{k}={v}" for k, v in sorted_components)
        key_string = "|".join(str(part) for part in key_parts)

        key_hash = hashlib.sha256(key_string.encode()).hexdigest()[:16]

        return f"{self.namespace}:{operation}:{key_hash}"
