"""Document store port (abstract interface).

Defines the contract every document store adapter implements, plus the
change-event shape the store's notification substrate delivers.
InMemoryDocumentStore serves development and tests, FirestoreDocumentStore
production.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from ordersync.store.paths import split_document_path


class ServerTimestamp:
    """Placeholder for a field the store stamps with its own clock at write time."""

    def __eq__(self, other):
        return isinstance(other, ServerTimestamp)

    def __hash__(self):
        return hash(ServerTimestamp)

    def __repr__(self):
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = ServerTimestamp()


class ChangeKind(Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class DocumentChange:
    """A change event with before/after snapshots of one document.

    `params` holds the path parameters extracted by the route that matched
    the change; it is empty until the change is routed.
    """

    path: str
    before: dict | None = None
    after: dict | None = None
    params: dict = field(default_factory=dict)

    def __post_init__(self):
        split_document_path(self.path)
        if self.before is None and self.after is None:
            raise ValueError(f"Change for {self.path!r} carries neither a before nor an after snapshot")

    @property
    def kind(self) -> ChangeKind:
        if self.before is None:
            return ChangeKind.CREATE
        if self.after is None:
            return ChangeKind.DELETE
        return ChangeKind.UPDATE

    @property
    def document_id(self) -> str:
        return split_document_path(self.path)[-1]


class DocumentStore(ABC):
    """Abstract interface for document store adapters."""

    @abstractmethod
    def get(self, path: str) -> dict | None:
        """Return a copy of the document at `path`, or None when it doesn't exist."""
        ...

    @abstractmethod
    def merge_write(self, path: str, changes: dict) -> None:
        """Apply `changes` to the document at `path`, creating it if needed.

        Fields absent from `changes` are left untouched. SERVER_TIMESTAMP
        values are replaced with the store's clock.
        """
        ...
