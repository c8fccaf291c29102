"""Persistence layer for per-user application state."""

from infrastructure.persistence.kv_store import InMemoryKeyValueStore, KeyValueStore

__all__ = ["KeyValueStore", "InMemoryKeyValueStore"]
