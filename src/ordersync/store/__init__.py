"""Document store registry — pluggable store adapters.

Uses the in-memory store by default. In production, configure via the
STORE_ADAPTER environment variable ("memory" or "firestore").
"""

import os

from ordersync.store.port import DocumentStore

_store_instance: DocumentStore | None = None


def get_store() -> DocumentStore:
    """Return the configured document store (singleton)."""
    global _store_instance
    if _store_instance is None:
        adapter = os.environ.get("STORE_ADAPTER", "memory")
        if adapter == "memory":
            from ordersync.store.memory import InMemoryDocumentStore

            _store_instance = InMemoryDocumentStore()
        elif adapter == "firestore":
            from ordersync.store.firestore import FirestoreDocumentStore

            _store_instance = FirestoreDocumentStore()
        else:
            raise ValueError(f"Unknown store adapter: {adapter}")
    return _store_instance


def set_store(store: DocumentStore) -> None:
    """Override the active document store (useful for tests)."""
    global _store_instance
    _store_instance = store


def reset_store() -> None:
    """Reset the store singleton (useful for testing)."""
    global _store_instance
    _store_instance = None
