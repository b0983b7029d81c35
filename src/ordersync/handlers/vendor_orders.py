"""Vendor-order mirror: projects vendor orders into the customer's order collection.

Reacts to every write of `vendors/{vendorId}/orders/{orderId}`:
merge-writes the payload into `users/{customerId}/orders/{orderId}`,
tells the vendor about brand-new orders, and tells the customer when the
vendor moves the order to another status.
"""

import structlog

from ordersync.collections import MIRRORED_FROM, user_order_path, user_path, vendor_path
from ordersync.effects import Effect, MergeWrite
from ordersync.notification.helpers import notify_token
from ordersync.notification.message import NotificationType
from ordersync.status.detector import DEFAULT_STATUS_FIELDS, detect_status_change
from ordersync.store.port import SERVER_TIMESTAMP, ChangeKind, DocumentChange, DocumentStore

logger = structlog.get_logger(__name__)


class VendorOrderMirror:
    """Keeps the customer-scoped copy of a vendor order in step with the original."""

    def on_vendor_order_written(self, change: DocumentChange, store: DocumentStore) -> list[Effect]:
        if change.after is None:
            logger.debug("Vendor order deleted, nothing to mirror", path=change.path)
            return []

        vendor_id = change.params["vendorId"]
        order_id = change.params["orderId"]
        order = change.after
        customer_id = order.get("customerId")
        vendor = store.get(vendor_path(vendor_id)) or {}

        effects: list[Effect] = []

        if customer_id:
            effects.append(
                MergeWrite(
                    path=user_order_path(customer_id, order_id),
                    changes={
                        **order,
                        "vendorId": vendor_id,
                        MIRRORED_FROM: change.path,
                        "updatedAt": SERVER_TIMESTAMP,
                    },
                )
            )
        else:
            logger.warning(
                "Vendor order has no customer, skipping mirror",
                vendor_id=vendor_id,
                order_id=order_id,
            )

        if change.kind == ChangeKind.CREATE:
            effects.extend(
                notify_token(
                    vendor.get("fcmToken"),
                    NotificationType.NEW_ORDER.value,
                    {"order_id": order_id, "customer_name": order.get("customerName")},
                )
            )

        # The customer hears about status moves only; the order's first
        # status is announced to the vendor above.
        status = detect_status_change(change.before, change.after, DEFAULT_STATUS_FIELDS)
        if customer_id and change.kind == ChangeKind.UPDATE and status.is_actionable:
            customer = store.get(user_path(customer_id)) or {}
            effects.extend(
                notify_token(
                    customer.get("fcmToken"),
                    NotificationType.ORDER_STATUS.value,
                    {
                        "order_id": order_id,
                        "status": status.current,
                        "vendor_name": vendor.get("name"),
                    },
                )
            )

        return effects
