import pytest

from infrastructure.persistence import InMemoryKeyValueStore


@pytest.mark.unit
class TestInMemoryKeyValueStore:
    def test_missing_key_returns_none(self):
        assert InMemoryKeyValueStore().get("missing") is None

    def test_set_get_delete(self):
        store = InMemoryKeyValueStore()
        store.set("messages-u1", [{"id": "1"}])
        assert store.get("messages-u1") == [{"id": "1"}]

        store.delete("messages-u1")
        store.delete("messages-u1")
        assert store.get("messages-u1") is None

    def test_values_are_copied(self):
        store = InMemoryKeyValueStore()
        value = [{"read": False}]
        store.set("k", value)

        value[0]["read"] = True
        loaded = store.get("k")
        loaded.append({"read": True})

        assert store.get("k") == [{"read": False}]
