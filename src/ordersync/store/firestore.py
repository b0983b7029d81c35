"""Firestore document store adapter (production)."""

from firebase_admin import firestore

from ordersync.firebase import get_firebase_app
from ordersync.store.paths import split_document_path
from ordersync.store.port import DocumentStore, ServerTimestamp


def _to_firestore(value):
    if isinstance(value, ServerTimestamp):
        return firestore.SERVER_TIMESTAMP
    if isinstance(value, dict):
        return {key: _to_firestore(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_firestore(item) for item in value]
    return value


class FirestoreDocumentStore(DocumentStore):
    """Reads and merge-writes documents through the Firebase Admin Firestore client."""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = firestore.client(app=get_firebase_app())
        return self._client

    def get(self, path: str) -> dict | None:
        snapshot = self.client.document("/".join(split_document_path(path))).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    def merge_write(self, path: str, changes: dict) -> None:
        self.client.document("/".join(split_document_path(path))).set(_to_firestore(changes), merge=True)
