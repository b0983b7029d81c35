"""Dispatch table and effect shell.

Maps collection patterns to the change handlers, runs every handler that
matches a change, and carries out the effects they return: merge-writes
go to the document store (storage errors propagate so the delivery
substrate can redeliver), pushes go through the best-effort sender.

Usage:
    fabric = build_fabric()
    fabric.handle(DocumentChange(path="opsOrders/o1", before=..., after=...))
"""

from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from enum import Enum

import structlog

from ordersync.channel.push_port import PushPort
from ordersync.collections import (
    INVENTORY_ITEM_PATTERN,
    OPS_ORDER_PATTERN,
    RECURRING_ORDER_PATTERN,
    USER_ORDER_PATTERN,
    VENDOR_ORDER_PATTERN,
)
from ordersync.effects import Effect, MergeWrite, SendToToken, SendToTopic
from ordersync.handlers.inventory import LowStockMonitor
from ordersync.handlers.ops_orders import OpsAggregationMirror
from ordersync.handlers.status_propagation import OpsStatusPropagator, OriginStatusPropagator
from ordersync.handlers.vendor_orders import VendorOrderMirror
from ordersync.notification.sender import NotificationSender
from ordersync.store import get_store
from ordersync.store.memory import InMemoryDocumentStore
from ordersync.store.paths import DocumentPattern, split_document_path
from ordersync.store.port import ChangeKind, DocumentChange, DocumentStore

logger = structlog.get_logger(__name__)

DEFAULT_MAX_EVENTS = 1000

Handler = Callable[[DocumentChange, DocumentStore], list[Effect]]


class Trigger(Enum):
    WRITE = "write"
    CREATE = "create"
    UPDATE = "update"

    def accepts(self, kind: ChangeKind) -> bool:
        if self is Trigger.WRITE:
            return True
        return self.value == kind.value


@dataclass(frozen=True)
class Route:
    name: str
    pattern: DocumentPattern
    trigger: Trigger
    handler: Handler


class PropagationLimitExceeded(Exception):
    """More changes were processed in one drain than the configured limit allows."""


def default_routes() -> list[Route]:
    vendor_orders = VendorOrderMirror()
    low_stock = LowStockMonitor()
    ops_orders = OpsAggregationMirror()
    origin_status = OriginStatusPropagator()
    ops_status = OpsStatusPropagator()

    return [
        Route(
            "sync_vendor_order",
            DocumentPattern(VENDOR_ORDER_PATTERN),
            Trigger.WRITE,
            vendor_orders.on_vendor_order_written,
        ),
        Route(
            "low_stock_alert",
            DocumentPattern(INVENTORY_ITEM_PATTERN),
            Trigger.UPDATE,
            low_stock.on_inventory_item_updated,
        ),
        Route(
            "mirror_instant_order_to_ops",
            DocumentPattern(USER_ORDER_PATTERN),
            Trigger.CREATE,
            ops_orders.on_instant_order_created,
        ),
        Route(
            "mirror_instant_order_status",
            DocumentPattern(USER_ORDER_PATTERN),
            Trigger.UPDATE,
            origin_status.on_instant_order_updated,
        ),
        Route(
            "mirror_recurring_to_ops",
            DocumentPattern(RECURRING_ORDER_PATTERN),
            Trigger.CREATE,
            ops_orders.on_recurring_order_created,
        ),
        Route(
            "mirror_recurring_status",
            DocumentPattern(RECURRING_ORDER_PATTERN),
            Trigger.UPDATE,
            origin_status.on_recurring_order_updated,
        ),
        Route(
            "propagate_ops_status",
            DocumentPattern(OPS_ORDER_PATTERN),
            Trigger.UPDATE,
            ops_status.on_ops_order_updated,
        ),
    ]


class Fabric:
    """Routes document changes to handlers and applies the resulting effects."""

    def __init__(
        self,
        store: DocumentStore,
        sender: NotificationSender | None = None,
        routes: Iterable[Route] | None = None,
    ):
        self.store = store
        self.sender = sender if sender is not None else NotificationSender()
        self.routes = list(routes) if routes is not None else default_routes()
        self._queue: deque[DocumentChange] = deque()

    @property
    def pending(self) -> int:
        return len(self._queue)

    def match(self, change: DocumentChange) -> list[tuple[Route, DocumentChange]]:
        """Return each matching route with the change bound to that route's path parameters."""
        path = "/".join(split_document_path(change.path))
        matches = []
        for route in self.routes:
            if not route.trigger.accepts(change.kind):
                continue
            params = route.pattern.match(path)
            if params is not None:
                matches.append((route, replace(change, path=path, params=params)))
        return matches

    def evaluate(self, change: DocumentChange) -> list[Effect]:
        """Run every matching handler; reads only, nothing is written or sent."""
        effects: list[Effect] = []
        for route, bound in self.match(change):
            with structlog.contextvars.bound_contextvars(route=route.name, path=bound.path):
                try:
                    effects.extend(route.handler(bound, self.store))
                except Exception:
                    logger.exception("Change handler failed", kind=bound.kind.value)
                    raise
        return effects

    def apply(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, MergeWrite):
                self.store.merge_write(effect.path, effect.changes)
            elif isinstance(effect, (SendToToken, SendToTopic)):
                self.sender.deliver(effect)
            else:
                raise TypeError(f"Unknown effect: {effect!r}")

    def handle(self, change: DocumentChange) -> list[Effect]:
        """Evaluate one change and apply its effects. Returns the applied effects."""
        effects = self.evaluate(change)
        self.apply(effects)
        if effects:
            logger.info(
                "Change handled",
                path=change.path,
                kind=change.kind.value,
                writes=sum(isinstance(effect, MergeWrite) for effect in effects),
                pushes=sum(not isinstance(effect, MergeWrite) for effect in effects),
            )
        return effects

    def deliver(self, change: DocumentChange) -> None:
        """Queue a change for the next drain."""
        self._queue.append(change)

    def drain(self, max_events: int = DEFAULT_MAX_EVENTS) -> int:
        """Handle queued changes, including those caused by the writes, until none are left.

        Returns the number of changes handled.
        """
        handled = 0
        while self._queue:
            if handled >= max_events:
                raise PropagationLimitExceeded(
                    f"Handled {handled} changes without settling; {len(self._queue)} still queued"
                )
            self.handle(self._queue.popleft())
            handled += 1
        return handled


def build_fabric(store: DocumentStore | None = None, channel: PushPort | None = None) -> Fabric:
    """Wire the default dispatch table to the given (or configured) adapters.

    An in-memory store feeds its own change events back into the fabric's
    queue, standing in for the store's notification substrate.
    """
    store = store if store is not None else get_store()
    fabric = Fabric(store=store, sender=NotificationSender(channel))
    if isinstance(store, InMemoryDocumentStore):
        store.subscribe(fabric.deliver)
    return fabric


_fabric_instance: Fabric | None = None


def get_fabric() -> Fabric:
    """Return the process-wide fabric (singleton) built on the configured adapters."""
    global _fabric_instance
    if _fabric_instance is None:
        _fabric_instance = build_fabric()
    return _fabric_instance


def reset_fabric() -> None:
    """Reset the fabric singleton (useful for testing)."""
    global _fabric_instance
    _fabric_instance = None
