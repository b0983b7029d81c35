"""Bidirectional status propagation between an ops aggregate and its origin order.

Origin → aggregate: a customer or subscription client moves the order;
the aggregate follows. Aggregate → origin: the ops team moves the
aggregate; the origin document follows and records when each delivery
milestone was reached.

Both directions only act on a status that actually moved, and the origin
side also skips when the aggregate already holds the new status. When one
direction's write re-triggers the other, the second hop finds nothing to
change, so any status update settles within two writes.
"""

import structlog

from ordersync.collections import MILESTONE_STATUSES, ops_order_path
from ordersync.effects import Effect, MergeWrite
from ordersync.handlers.fields import is_vendor_mirror
from ordersync.notification.helpers import broadcast_to_ops
from ordersync.notification.message import NotificationType
from ordersync.status.detector import (
    CUSTOMER_ORDER_STATUS_FIELDS,
    DEFAULT_STATUS_FIELDS,
    detect_status_change,
    effective_status,
)
from ordersync.store.port import SERVER_TIMESTAMP, DocumentChange, DocumentStore
from ordersync.templates.ops_status import STATUS_CHANGED, STATUS_UPDATED_BY_OPS

logger = structlog.get_logger(__name__)


def milestone_field(status: str) -> str | None:
    """Timestamp field stamped on the origin when it reaches a delivery milestone."""
    if status in MILESTONE_STATUSES:
        return f"{status.lower()}At"
    return None


class OriginStatusPropagator:
    """Origin → aggregate."""

    def on_instant_order_updated(self, change: DocumentChange, store: DocumentStore) -> list[Effect]:
        if is_vendor_mirror(change.after):
            return []
        return self._propagate(change, store, CUSTOMER_ORDER_STATUS_FIELDS, label="Order")

    def on_recurring_order_updated(self, change: DocumentChange, store: DocumentStore) -> list[Effect]:
        return self._propagate(change, store, DEFAULT_STATUS_FIELDS, label="Recurring order")

    def _propagate(
        self,
        change: DocumentChange,
        store: DocumentStore,
        status_fields: tuple[str, ...],
        label: str,
    ) -> list[Effect]:
        status = detect_status_change(change.before, change.after, status_fields)
        if not status.is_actionable:
            return []

        order_id = change.document_id
        path = ops_order_path(order_id)
        aggregate = store.get(path)
        if aggregate is None:
            logger.info("No ops aggregate for order, skipping status mirror", order_id=order_id)
            return []

        if effective_status(aggregate, DEFAULT_STATUS_FIELDS) == status.current:
            logger.debug("Ops aggregate already at status", order_id=order_id, status=status.current)
            return []

        logger.info(
            "Mirroring origin status to ops",
            order_id=order_id,
            previous=status.previous,
            current=status.current,
        )
        return [
            MergeWrite(path=path, changes={"status": status.current, "updatedAt": SERVER_TIMESTAMP}),
            *broadcast_to_ops(
                NotificationType.OPS_STATUS.value,
                {"order_id": order_id, "status": status.current, "label": label, "note": STATUS_CHANGED},
            ),
        ]


class OpsStatusPropagator:
    """Aggregate → origin."""

    def on_ops_order_updated(self, change: DocumentChange, store: DocumentStore) -> list[Effect]:
        status = detect_status_change(change.before, change.after, DEFAULT_STATUS_FIELDS)
        if not status.is_actionable:
            return []

        ops_id = change.params["opsId"]
        source_ref = (change.after or {}).get("sourceRef")
        effects: list[Effect] = []

        if not source_ref:
            logger.warning("Ops order has no sourceRef, status stays on the aggregate", ops_id=ops_id)
        elif store.get(source_ref) is None:
            logger.warning("Origin order not found, status stays on the aggregate", ops_id=ops_id, source_ref=source_ref)
        else:
            changes = {
                "status": status.current,
                "orderStatus": status.current,
                "updatedAt": SERVER_TIMESTAMP,
            }
            stamped = milestone_field(status.current)
            if stamped:
                changes[stamped] = SERVER_TIMESTAMP

            logger.info(
                "Propagating ops status to origin",
                ops_id=ops_id,
                source_ref=source_ref,
                previous=status.previous,
                current=status.current,
            )
            effects.append(MergeWrite(path=source_ref, changes=changes))

        effects.extend(
            broadcast_to_ops(
                NotificationType.OPS_STATUS.value,
                {"order_id": ops_id, "status": status.current, "note": STATUS_UPDATED_BY_OPS},
            )
        )
        return effects
