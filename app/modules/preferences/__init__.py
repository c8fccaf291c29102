"""Reminder preferences: storage interface and duplicate-record policy."""

from modules.preferences.store import (
    InMemoryPreferenceStore,
    PreferenceStore,
    PreferenceValidationError,
    select_most_recent,
)

__all__ = [
    "PreferenceStore",
    "InMemoryPreferenceStore",
    "PreferenceValidationError",
    "select_most_recent",
]
