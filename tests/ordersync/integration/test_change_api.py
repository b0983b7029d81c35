"""Integration tests for the change-event API."""

import pytest
from fastapi.testclient import TestClient
from ordersync.channel import set_channel
from ordersync.store import set_store


def _get_test_client():
    """Build a minimal FastAPI test client with the change-event routes."""
    from fastapi import FastAPI
    from ordersync.api.routes import router

    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


@pytest.fixture(autouse=True)
def _adapters(store, push):
    set_store(store)
    set_channel(push)


class TestHealth:
    def test_lists_routes(self):
        resp = _get_test_client().get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["domain"] == "ordersync"
        assert "propagate_ops_status" in data["routes"]
        assert len(data["routes"]) == 7


class TestChangeEvents:
    def test_instant_order_creation(self, store, push):
        store.documents["users/u1/orders/o1"] = {"status": "PLACED", "totalAmount": 80}

        resp = _get_test_client().post(
            "/changes",
            json={"path": "users/u1/orders/o1", "before": None, "after": {"status": "PLACED", "totalAmount": 80}},
        )
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "path": "users/u1/orders/o1", "kind": "create", "effects": 2}

        aggregate = store.get("opsOrders/o1")
        assert aggregate["amount"] == 80
        assert aggregate["orderType"] == "INSTANT"
        assert push.topic_pushes[0]["body"] == "Order #o1 placed"

    def test_vendor_order_update_notifies_customer(self, store, push):
        store.set("vendors/v1", {"name": "Fresh Farm", "fcmToken": "tok-v1"})
        store.set("users/u1", {"fcmToken": "tok-u1"})

        resp = _get_test_client().post(
            "/changes",
            json={
                "path": "vendors/v1/orders/o1",
                "before": {"customerId": "u1", "status": "PLACED"},
                "after": {"customerId": "u1", "status": "PACKED"},
            },
        )
        assert resp.status_code == 200
        assert resp.json()["kind"] == "update"
        assert resp.json()["effects"] == 2
        assert push.sent_pushes[-1]["device_token"] == "tok-u1"
        assert store.get("users/u1/orders/o1")["status"] == "PACKED"

    def test_unrouted_path(self):
        resp = _get_test_client().post("/changes", json={"path": "carts/c1", "after": {"items": []}})
        assert resp.status_code == 200
        assert resp.json()["effects"] == 0

    def test_invalid_path(self):
        resp = _get_test_client().post("/changes", json={"path": "opsOrders", "after": {}})
        assert resp.status_code == 422

    def test_missing_snapshots(self):
        resp = _get_test_client().post("/changes", json={"path": "opsOrders/o1"})
        assert resp.status_code == 422
