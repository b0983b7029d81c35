"""Ops aggregation mirror: one canonical operations record per instant or recurring order.

Instant orders (`users/{userId}/orders/{orderId}`) and recurring orders
(`recurringOrders/{recurringId}`) are written by different clients with
different field names. On creation each is normalized into
`opsOrders/{same id}`, tagged with `sourceRef` pointing back at the origin
document, and announced on the ops topic.
"""

import structlog

from ordersync.collections import ops_order_path
from ordersync.effects import Effect, MergeWrite
from ordersync.handlers.fields import first_present, is_vendor_mirror
from ordersync.notification.helpers import broadcast_to_ops
from ordersync.notification.message import NotificationType
from ordersync.status.detector import CUSTOMER_ORDER_STATUS_FIELDS, DEFAULT_STATUS_FIELDS, effective_status
from ordersync.store.port import SERVER_TIMESTAMP, DocumentChange, DocumentStore

logger = structlog.get_logger(__name__)

INSTANT = "INSTANT"
RECURRING = "RECURRING"

INSTANT_DEFAULT_STATUS = "PLACED"
RECURRING_DEFAULT_STATUS = "ACTIVE"

INSTANT_AMOUNT_FIELDS = ("totalAmount", "amount")
RECURRING_AMOUNT_FIELDS = ("currentAmount", "basePaidAmount", "paidAmount")
INSTANT_ADDRESS_FIELDS = ("deliveryAddress", "deliveryLabel")
RECURRING_ADDRESS_FIELDS = ("deliveryAddress", "deliveryAddressId")
NEXT_DELIVERY_FIELDS = ("next_delivery_date", "nextDeliveryDate")

# Only the first creation sets these; a redelivered creation leaves them alone
CREATION_ONLY_FIELDS = ("status", "createdAt")


def build_ops_order_from_instant(change: DocumentChange) -> dict:
    data = change.after or {}
    items = data.get("items")
    return {
        "orderId": change.document_id,
        "sourceRef": change.path,
        "userId": first_present(data, ("userId",), change.params.get("userId")),
        "orderType": INSTANT,
        "mode": None,
        "status": effective_status(data, CUSTOMER_ORDER_STATUS_FIELDS) or INSTANT_DEFAULT_STATUS,
        "amount": first_present(data, INSTANT_AMOUNT_FIELDS, 0),
        "address": first_present(data, INSTANT_ADDRESS_FIELDS),
        "createdAt": SERVER_TIMESTAMP,
        "items": items if items is not None else [],
        "deliveryDate": data.get("deliveryDate"),
    }


def build_ops_order_from_recurring(change: DocumentChange) -> dict:
    data = change.after or {}
    items = data.get("items")
    frequency = data.get("frequency")
    return {
        "orderId": change.document_id,
        "sourceRef": change.path,
        "userId": data.get("userId"),
        "orderType": RECURRING,
        "mode": frequency.upper() if isinstance(frequency, str) and frequency else None,
        "status": effective_status(data, DEFAULT_STATUS_FIELDS) or RECURRING_DEFAULT_STATUS,
        "amount": first_present(data, RECURRING_AMOUNT_FIELDS, 0),
        "address": first_present(data, RECURRING_ADDRESS_FIELDS),
        "createdAt": SERVER_TIMESTAMP,
        "items": items if items is not None else {},
        "nextDeliveryDate": first_present(data, NEXT_DELIVERY_FIELDS),
    }


class OpsAggregationMirror:
    """Creates the ops aggregate for newly created instant and recurring orders."""

    def on_instant_order_created(self, change: DocumentChange, store: DocumentStore) -> list[Effect]:
        if is_vendor_mirror(change.after):
            logger.debug("Customer copy of a vendor order, not an instant order", path=change.path)
            return []

        payload = build_ops_order_from_instant(change)
        effects, replayed = self._aggregate(payload, store)
        if not replayed:
            effects.extend(broadcast_to_ops(NotificationType.OPS_NEW_ORDER.value, {"order_id": payload["orderId"]}))
        return effects

    def on_recurring_order_created(self, change: DocumentChange, store: DocumentStore) -> list[Effect]:
        payload = build_ops_order_from_recurring(change)
        effects, replayed = self._aggregate(payload, store)
        if not replayed:
            effects.extend(
                broadcast_to_ops(
                    NotificationType.OPS_NEW_RECURRING.value,
                    {"order_id": payload["orderId"], "mode": payload["mode"]},
                )
            )
        return effects

    def _aggregate(self, payload: dict, store: DocumentStore) -> tuple[list[Effect], bool]:
        """Return the aggregate write, and whether this creation was already aggregated."""
        path = ops_order_path(payload["orderId"])
        existing_source = (store.get(path) or {}).get("sourceRef")

        # sourceRef is set once; a second origin claiming the same id only
        # records its type, so the first origin's status and payload stay intact.
        if existing_source and existing_source != payload["sourceRef"]:
            logger.warning(
                "Ops order id already aggregated from another source",
                order_id=payload["orderId"],
                existing_source=existing_source,
                incoming_source=payload["sourceRef"],
                incoming_type=payload["orderType"],
            )
            changes = {"orderType": payload["orderType"], "conflictingSourceRef": payload["sourceRef"]}
            return [MergeWrite(path=path, changes=changes)], False

        if existing_source:
            logger.info(
                "Creation already aggregated, keeping ops status",
                order_id=payload["orderId"],
                source_ref=existing_source,
            )
            changes = {key: value for key, value in payload.items() if key not in CREATION_ONLY_FIELDS}
            return [MergeWrite(path=path, changes=changes)], True

        logger.info(
            "Aggregating order into ops",
            order_id=payload["orderId"],
            order_type=payload["orderType"],
            status=payload["status"],
        )
        return [MergeWrite(path=path, changes=payload)], False
