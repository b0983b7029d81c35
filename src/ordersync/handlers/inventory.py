"""Inventory threshold monitor: one low-stock alert per downward crossing.

The before/after snapshots are the only state needed: the alert fires
when stock goes from at-or-above the threshold to below it, so stock
that keeps falling, or was already low, never re-alerts.
"""

import structlog

from ordersync.collections import vendor_path
from ordersync.effects import Effect
from ordersync.notification.helpers import notify_token
from ordersync.notification.message import NotificationType
from ordersync.store.port import DocumentChange, DocumentStore

logger = structlog.get_logger(__name__)


def _quantity(document: dict | None, field: str) -> float:
    value = (document or {}).get(field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def crossed_below_threshold(previous_qty: float, new_qty: float, threshold: float) -> bool:
    return threshold > 0 and new_qty < threshold and previous_qty >= threshold


class LowStockMonitor:
    def on_inventory_item_updated(self, change: DocumentChange, store: DocumentStore) -> list[Effect]:
        if change.after is None:
            return []

        previous_qty = _quantity(change.before, "stockQty")
        new_qty = _quantity(change.after, "stockQty")
        threshold = _quantity(change.after, "lowStockThreshold")

        if not crossed_below_threshold(previous_qty, new_qty, threshold):
            return []

        vendor_id = change.params["vendorId"]
        product_id = change.params["productId"]
        logger.info(
            "Stock crossed below threshold",
            vendor_id=vendor_id,
            product_id=product_id,
            previous_qty=previous_qty,
            new_qty=new_qty,
            threshold=threshold,
        )

        vendor = store.get(vendor_path(vendor_id)) or {}
        return notify_token(
            vendor.get("fcmToken"),
            NotificationType.LOW_STOCK.value,
            {
                "product_id": product_id,
                "item_name": change.after.get("name"),
                "stock_qty": new_qty,
                "threshold": threshold,
            },
        )
