"""In-memory document store: a Firestore stand-in for development and tests.

Merge-writes deep-merge nested maps the way Firestore's `set(merge=True)`
does, SERVER_TIMESTAMP placeholders are resolved with the store clock, and
every mutation publishes a DocumentChange to the subscribed listeners.
"""

import copy
from collections.abc import Callable
from datetime import UTC, datetime

import structlog

from ordersync.store.paths import split_document_path
from ordersync.store.port import DocumentChange, DocumentStore, ServerTimestamp

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _resolve_timestamps(value, now: datetime):
    if isinstance(value, ServerTimestamp):
        return now
    if isinstance(value, dict):
        return {key: _resolve_timestamps(item, now) for key, item in value.items()}
    if isinstance(value, list):
        return [_resolve_timestamps(item, now) for item in value]
    return value


def _deep_merge(target: dict, changes: dict) -> dict:
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = copy.deepcopy(value)
    return target


class InMemoryDocumentStore(DocumentStore):
    """Document store that keeps documents in a dict keyed by path."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self.documents: dict[str, dict] = {}
        self.writes: list[dict] = []
        self.clock = clock
        self._listeners: list[Callable[[DocumentChange], None]] = []

    def subscribe(self, listener: Callable[[DocumentChange], None]) -> None:
        """Register a listener that receives a DocumentChange for every mutation."""
        self._listeners.append(listener)

    def get(self, path: str) -> dict | None:
        key = "/".join(split_document_path(path))
        document = self.documents.get(key)
        return copy.deepcopy(document) if document is not None else None

    def merge_write(self, path: str, changes: dict) -> None:
        key = "/".join(split_document_path(path))
        resolved = _resolve_timestamps(changes, self.clock())
        before = self.documents.get(key)
        after = _deep_merge(copy.deepcopy(before) if before is not None else {}, resolved)
        self._commit(key, before, after, operation="merge", changes=resolved)

    def set(self, path: str, data: dict) -> None:
        """Replace the whole document, as an external writer would."""
        key = "/".join(split_document_path(path))
        resolved = _resolve_timestamps(data, self.clock())
        before = self.documents.get(key)
        self._commit(key, before, copy.deepcopy(resolved), operation="set", changes=resolved)

    def delete(self, path: str) -> None:
        key = "/".join(split_document_path(path))
        before = self.documents.get(key)
        if before is None:
            return
        self._commit(key, before, None, operation="delete", changes=None)

    def writes_to(self, path: str) -> list[dict]:
        """Return the recorded mutations for one document path."""
        key = "/".join(split_document_path(path))
        return [write for write in self.writes if write["path"] == key]

    def reset(self) -> None:
        """Clear documents and recorded writes (useful between tests)."""
        self.documents.clear()
        self.writes.clear()

    def _commit(self, key: str, before: dict | None, after: dict | None, operation: str, changes) -> None:
        if after is None:
            self.documents.pop(key, None)
        else:
            self.documents[key] = after

        self.writes.append({"path": key, "operation": operation, "changes": copy.deepcopy(changes)})
        logger.debug("Document written", path=key, operation=operation)

        change = DocumentChange(
            path=key,
            before=copy.deepcopy(before),
            after=copy.deepcopy(after),
        )
        for listener in self._listeners:
            listener(change)
