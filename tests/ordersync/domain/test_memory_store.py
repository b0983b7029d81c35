"""Tests for the in-memory document store and the store registry."""

from datetime import UTC, datetime

import pytest
from ordersync.store import get_store, reset_store, set_store
from ordersync.store.memory import InMemoryDocumentStore
from ordersync.store.port import SERVER_TIMESTAMP, ChangeKind

NOW = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)


class TestMergeWrite:
    def setup_method(self):
        self.store = InMemoryDocumentStore(clock=lambda: NOW)

    def test_creates_missing_document(self):
        self.store.merge_write("opsOrders/o1", {"status": "PLACED"})
        assert self.store.get("opsOrders/o1") == {"status": "PLACED"}

    def test_keeps_untouched_fields(self):
        self.store.merge_write("opsOrders/o1", {"status": "PLACED", "amount": 120})
        self.store.merge_write("opsOrders/o1", {"status": "PACKING"})
        assert self.store.get("opsOrders/o1") == {"status": "PACKING", "amount": 120}

    def test_deep_merges_nested_maps(self):
        self.store.merge_write("recurringOrders/r1", {"items": {"milk": 1, "eggs": 12}})
        self.store.merge_write("recurringOrders/r1", {"items": {"milk": 2}})
        assert self.store.get("recurringOrders/r1")["items"] == {"milk": 2, "eggs": 12}

    def test_resolves_server_timestamp(self):
        self.store.merge_write("opsOrders/o1", {"createdAt": SERVER_TIMESTAMP})
        assert self.store.get("opsOrders/o1")["createdAt"] == NOW

    def test_get_returns_a_copy(self):
        self.store.merge_write("opsOrders/o1", {"items": [{"sku": "a"}]})
        self.store.get("opsOrders/o1")["items"].append({"sku": "b"})
        assert self.store.get("opsOrders/o1")["items"] == [{"sku": "a"}]

    def test_missing_document(self):
        assert self.store.get("opsOrders/nope") is None

    def test_records_writes(self):
        self.store.merge_write("opsOrders/o1", {"status": "PLACED"})
        self.store.merge_write("opsOrders/o2", {"status": "PLACED"})
        writes = self.store.writes_to("opsOrders/o1")
        assert writes == [{"path": "opsOrders/o1", "operation": "merge", "changes": {"status": "PLACED"}}]

    def test_invalid_path(self):
        with pytest.raises(ValueError):
            self.store.merge_write("opsOrders", {"status": "PLACED"})


class TestSetAndDelete:
    def setup_method(self):
        self.store = InMemoryDocumentStore(clock=lambda: NOW)

    def test_set_replaces_document(self):
        self.store.set("users/u1", {"name": "Ana", "fcmToken": "tok-u1"})
        self.store.set("users/u1", {"name": "Ana B."})
        assert self.store.get("users/u1") == {"name": "Ana B."}

    def test_delete(self):
        self.store.set("users/u1", {"name": "Ana"})
        self.store.delete("users/u1")
        assert self.store.get("users/u1") is None

    def test_delete_missing_is_noop(self):
        self.store.delete("users/u1")
        assert self.store.writes == []

    def test_reset(self):
        self.store.set("users/u1", {"name": "Ana"})
        self.store.reset()
        assert self.store.documents == {}
        assert self.store.writes == []


class TestChangePublication:
    def setup_method(self):
        self.store = InMemoryDocumentStore(clock=lambda: NOW)
        self.changes = []
        self.store.subscribe(self.changes.append)

    def test_create(self):
        self.store.merge_write("vendors/v1/orders/o1", {"status": "PLACED"})
        change = self.changes[0]
        assert change.kind == ChangeKind.CREATE
        assert change.before is None
        assert change.after == {"status": "PLACED"}

    def test_update_carries_both_snapshots(self):
        self.store.merge_write("vendors/v1/orders/o1", {"status": "PLACED"})
        self.store.merge_write("vendors/v1/orders/o1", {"status": "PACKED"})
        change = self.changes[1]
        assert change.kind == ChangeKind.UPDATE
        assert change.before == {"status": "PLACED"}
        assert change.after == {"status": "PACKED"}

    def test_delete(self):
        self.store.set("vendors/v1/orders/o1", {"status": "PLACED"})
        self.store.delete("vendors/v1/orders/o1")
        assert self.changes[-1].kind == ChangeKind.DELETE

    def test_snapshots_are_detached(self):
        self.store.merge_write("vendors/v1/orders/o1", {"status": "PLACED"})
        self.changes[0].after["status"] = "TAMPERED"
        assert self.store.get("vendors/v1/orders/o1") == {"status": "PLACED"}


class TestStoreRegistry:
    def test_default_is_memory(self, monkeypatch):
        monkeypatch.delenv("STORE_ADAPTER", raising=False)
        assert isinstance(get_store(), InMemoryDocumentStore)

    def test_singleton(self):
        assert get_store() is get_store()

    def test_set_store_overrides(self):
        store = InMemoryDocumentStore()
        set_store(store)
        assert get_store() is store

    def test_reset_store(self):
        first = get_store()
        reset_store()
        assert get_store() is not first

    def test_unknown_adapter(self, monkeypatch):
        monkeypatch.setenv("STORE_ADAPTER", "postgres")
        with pytest.raises(ValueError):
            get_store()
