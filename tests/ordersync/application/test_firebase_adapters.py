"""Tests for the Firestore store and FCM push adapters, with the Firebase calls stubbed."""

from firebase_admin import exceptions, firestore
from ordersync.channel.fcm_push import FcmPushAdapter
from ordersync.store.firestore import FirestoreDocumentStore
from ordersync.store.port import SERVER_TIMESTAMP


class _Snapshot:
    def __init__(self, data):
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return self._data


class _DocumentRef:
    def __init__(self, client, path):
        self.client = client
        self.path = path

    def get(self):
        return _Snapshot(self.client.data.get(self.path))

    def set(self, data, merge=False):
        self.client.sets.append((self.path, data, merge))


class _FirestoreClient:
    def __init__(self, data=None):
        self.data = data or {}
        self.sets = []

    def document(self, path):
        return _DocumentRef(self, path)


class TestFirestoreDocumentStore:
    def test_get_existing(self):
        store = FirestoreDocumentStore(client=_FirestoreClient({"vendors/v1": {"fcmToken": "tok-v1"}}))
        assert store.get("vendors/v1") == {"fcmToken": "tok-v1"}

    def test_get_missing(self):
        store = FirestoreDocumentStore(client=_FirestoreClient())
        assert store.get("vendors/v1") is None

    def test_merge_write_translates_timestamps(self):
        client = _FirestoreClient()
        store = FirestoreDocumentStore(client=client)
        store.merge_write(
            "/opsOrders/o1/",
            {"status": "PACKING", "updatedAt": SERVER_TIMESTAMP, "meta": {"at": SERVER_TIMESTAMP}},
        )

        [(path, data, merge)] = client.sets
        assert path == "opsOrders/o1"
        assert merge is True
        assert data["status"] == "PACKING"
        assert data["updatedAt"] is firestore.SERVER_TIMESTAMP
        assert data["meta"]["at"] is firestore.SERVER_TIMESTAMP


class TestFcmPushAdapter:
    def setup_method(self):
        self.adapter = FcmPushAdapter(app=object())

    def test_send_to_token(self, monkeypatch):
        sent = []

        def fake_send(message, app=None):
            sent.append(message)
            return "projects/demo/messages/1"

        monkeypatch.setattr("ordersync.channel.fcm_push.messaging.send", fake_send)
        result = self.adapter.send(device_token="tok-v1", title="New order #o1", body="Order received", data={"orderId": "o1"})

        assert result == {"message_id": "projects/demo/messages/1", "status": "sent"}
        assert sent[0].token == "tok-v1"
        assert sent[0].notification.title == "New order #o1"
        assert sent[0].data == {"orderId": "o1"}

    def test_send_to_topic(self, monkeypatch):
        sent = []
        monkeypatch.setattr(
            "ordersync.channel.fcm_push.messaging.send",
            lambda message, app=None: sent.append(message) or "projects/demo/messages/2",
        )
        result = self.adapter.send_to_topic(topic="ops-orders", title="New order received", body="Order #o1 placed")
        assert result["status"] == "sent"
        assert sent[0].topic == "ops-orders"

    def test_firebase_error_is_reported(self, monkeypatch):
        def failing_send(message, app=None):
            raise exceptions.UnavailableError("FCM unavailable")

        monkeypatch.setattr("ordersync.channel.fcm_push.messaging.send", failing_send)
        result = self.adapter.send(device_token="tok-v1", title="Hi", body="Hello")
        assert result["status"] == "failed"
        assert result["message_id"] is None
        assert "FCM unavailable" in result["error"]


class TestRegistriesBuildFirebaseAdapters:
    def test_fcm_channel(self, monkeypatch):
        from ordersync.channel import get_channel

        monkeypatch.setenv("PUSH_ADAPTER", "fcm")
        assert isinstance(get_channel(), FcmPushAdapter)

    def test_firestore_store(self, monkeypatch):
        from ordersync.store import get_store

        monkeypatch.setenv("STORE_ADAPTER", "firestore")
        assert isinstance(get_store(), FirestoreDocumentStore)
