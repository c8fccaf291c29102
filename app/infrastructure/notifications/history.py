"""Capped per-user message history for the message center.

Entries are kept newest first under ``messages-{user_id}`` in an injected
key-value store. Appending beyond the cap evicts the oldest entries.
"""

import threading
import uuid
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import MilestoneEvent, MilestoneKind, utc_now
from infrastructure.persistence import KeyValueStore

logger = get_module_logger()

DEFAULT_MAX_ENTRIES = 50


class HistoryEntry(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    text: str
    kind: MilestoneKind
    timestamp: datetime = Field(default_factory=utc_now)
    read: bool = False

    @classmethod
    def from_event(cls, event: MilestoneEvent) -> "HistoryEntry":
        return cls(
            id=str(event.event_id),
            text=event.raw_text,
            kind=event.kind,
            timestamp=event.timestamp,
        )


class MessageHistory:
    """Message center storage for every user.

    Args:
        store: Backing key-value store
        max_entries: Entries kept per user
    """

    def __init__(self, store: KeyValueStore, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._store = store
        self.max_entries = max_entries
        self._lock = threading.Lock()

    @staticmethod
    def key_for(user_id: str) -> str:
        return f"messages-{user_id}"

    def _load(self, user_id: str) -> List[HistoryEntry]:
        raw = self._store.get(self.key_for(user_id)) or []
        entries = []
        for item in raw:
            try:
                entries.append(HistoryEntry.model_validate(item))
            except ValueError as e:
                logger.warning("dropping_invalid_history_entry", user_id=user_id, error=str(e))
        return entries

    def _save(self, user_id: str, entries: List[HistoryEntry]) -> None:
        self._store.set(
            self.key_for(user_id), [entry.model_dump(mode="json") for entry in entries]
        )

    def append(self, user_id: str, entry: HistoryEntry) -> List[HistoryEntry]:
        """Add an entry at the front and evict beyond the cap."""
        with self._lock:
            entries = [entry] + self._load(user_id)
            evicted = len(entries) - self.max_entries
            entries = entries[: self.max_entries]
            self._save(user_id, entries)
        if evicted > 0:
            logger.debug("history_entries_evicted", user_id=user_id, count=evicted)
        return entries

    def list(self, user_id: str) -> List[HistoryEntry]:
        """Entries for a user, newest first."""
        with self._lock:
            return self._load(user_id)

    def unread_count(self, user_id: str) -> int:
        return sum(1 for entry in self.list(user_id) if not entry.read)

    def mark_read(self, user_id: str, entry_id: str) -> bool:
        """Mark one entry read. Returns False when the id is unknown."""
        with self._lock:
            entries = self._load(user_id)
            for entry in entries:
                if entry.id == entry_id:
                    entry.read = True
                    self._save(user_id, entries)
                    return True
            return False

    def mark_all_read(self, user_id: str) -> None:
        with self._lock:
            entries = self._load(user_id)
            for entry in entries:
                entry.read = True
            self._save(user_id, entries)

    def delete(self, user_id: str, entry_id: str) -> bool:
        """Remove one entry. Returns False when the id is unknown."""
        with self._lock:
            entries = self._load(user_id)
            remaining = [entry for entry in entries if entry.id != entry_id]
            if len(remaining) == len(entries):
                return False
            self._save(user_id, remaining)
            return True

    def clear(self, user_id: str) -> None:
        with self._lock:
            self._store.delete(self.key_for(user_id))
