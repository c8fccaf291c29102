"""Reminder preference storage.

Upstream storage has been seen to hold more than one preference row per
user. Reads never fail on that; ``select_most_recent`` picks one record
deterministically and every store applies it in ``get_preference``.
"""

import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import (
    NotificationPreference,
    PreferenceUpdate,
    utc_now,
)

logger = get_module_logger()


class PreferenceValidationError(ValueError):
    """Raised when a save would break the contact invariant."""

    def __init__(self, user_id: str, message: str):
        self.user_id = user_id
        super().__init__(message)


def select_most_recent(
    candidates: Sequence[NotificationPreference],
) -> Optional[NotificationPreference]:
    """Pick the record with the latest ``updated_at``.

    Ties go to the record that appears last in ``candidates``.
    """
    chosen = None
    for candidate in candidates:
        if chosen is None or candidate.updated_at >= chosen.updated_at:
            chosen = candidate
    return chosen


class PreferenceStore(ABC):
    """Read and save reminder preferences."""

    @abstractmethod
    def list_preferences(self, user_id: str) -> List[NotificationPreference]:
        """Every stored record for a user, in storage order."""
        pass

    def get_preference(self, user_id: str) -> Optional[NotificationPreference]:
        """The current record for a user, or None."""
        candidates = self.list_preferences(user_id)
        if len(candidates) > 1:
            logger.warning(
                "duplicate_preference_records",
                user_id=user_id,
                count=len(candidates),
            )
        return select_most_recent(candidates)

    @abstractmethod
    def save_preference(
        self, user_id: str, update: PreferenceUpdate
    ) -> NotificationPreference:
        """Merge a partial update into the current record and store it.

        Raises:
            PreferenceValidationError: When the merged record breaks the
                contact invariant. Nothing is stored in that case.
        """
        pass


class InMemoryPreferenceStore(PreferenceStore):
    """Thread-safe process-local store.

    Records are never deleted. Saving replaces the most recent record for the
    user with the merged one and leaves older duplicates in place.
    """

    def __init__(self, records: Optional[Sequence[NotificationPreference]] = None):
        self._records: Dict[str, List[NotificationPreference]] = defaultdict(list)
        self._lock = threading.Lock()
        for record in records or []:
            self._records[record.user_id].append(record)

    def add_record(self, record: NotificationPreference) -> None:
        """Insert a raw record without validation, as a legacy import would."""
        with self._lock:
            self._records[record.user_id].append(record)

    def list_preferences(self, user_id: str) -> List[NotificationPreference]:
        with self._lock:
            return [record.model_copy() for record in self._records.get(user_id, [])]

    def save_preference(
        self, user_id: str, update: PreferenceUpdate
    ) -> NotificationPreference:
        with self._lock:
            records = self._records[user_id]
            current = select_most_recent(records)
            base = current if current is not None else NotificationPreference(user_id=user_id)

            changes = update.model_dump(exclude_unset=True)
            merged = base.model_copy(update={**changes, "updated_at": utc_now()})

            try:
                merged.validate_contact_invariant()
            except ValueError as e:
                logger.info("preference_rejected", user_id=user_id, error=str(e))
                raise PreferenceValidationError(user_id, str(e)) from e

            if current is None:
                records.append(merged)
            else:
                records[records.index(current)] = merged

        logger.info(
            "preference_saved",
            user_id=user_id,
            preferred_channel=merged.preferred_channel.value,
            reminders_enabled=merged.reminders_enabled,
        )
        return merged
