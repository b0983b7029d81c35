"""Status-change detection: the building block every propagation rule uses.

Each order variant keeps its status under a different field (customer
orders prefer `orderStatus`, everything else uses `status`), so detection
reads an ordered chain of field names per collection. A write that leaves
the effective status where it was is never actionable, which keeps the
aggregate and its origin from re-triggering each other.
"""

from dataclasses import dataclass

from ordersync.collections import OPS_ORDERS, ORDERS, RECURRING_ORDERS, USERS, VENDORS
from ordersync.store.paths import split_document_path

DEFAULT_STATUS_FIELDS = ("status",)
CUSTOMER_ORDER_STATUS_FIELDS = ("orderStatus", "status")

# (parent collection, collection) -> status field chain
_STATUS_FIELDS_BY_COLLECTION = {
    (VENDORS, ORDERS): DEFAULT_STATUS_FIELDS,
    (USERS, ORDERS): CUSTOMER_ORDER_STATUS_FIELDS,
    (None, RECURRING_ORDERS): DEFAULT_STATUS_FIELDS,
    (None, OPS_ORDERS): DEFAULT_STATUS_FIELDS,
}


@dataclass(frozen=True)
class StatusChange:
    """Effective status of a document before and after one write."""

    previous: str | None
    current: str | None

    @property
    def changed(self) -> bool:
        return self.previous != self.current

    @property
    def is_actionable(self) -> bool:
        """True when the status moved to a non-empty value."""
        return self.changed and bool(self.current)


def status_fields_for(path: str) -> tuple[str, ...]:
    """Return the status field chain for the collection a document lives in."""
    segments = split_document_path(path)
    parent = segments[-4] if len(segments) >= 4 else None
    return _STATUS_FIELDS_BY_COLLECTION.get((parent, segments[-2]), DEFAULT_STATUS_FIELDS)


def effective_status(document: dict | None, fields: tuple[str, ...] = DEFAULT_STATUS_FIELDS) -> str | None:
    """Return the first non-empty status found along `fields`."""
    if not document:
        return None
    for name in fields:
        value = document.get(name)
        if isinstance(value, str) and value:
            return value
    return None


def detect_status_change(
    before: dict | None,
    after: dict | None,
    fields: tuple[str, ...] = DEFAULT_STATUS_FIELDS,
) -> StatusChange:
    """Compare the effective status of two snapshots; either may be absent."""
    return StatusChange(
        previous=effective_status(before, fields),
        current=effective_status(after, fields),
    )
