"""Ops status template: broadcast whenever an order status crosses between ops and its origin.

The label distinguishes recurring orders; the note says which side moved.
"""

from ordersync.notification.message import NotificationType

STATUS_CHANGED = "Status changed"
STATUS_UPDATED_BY_OPS = "Status updated by ops"


class OpsStatusTemplate:
    notification_type = NotificationType.OPS_STATUS.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context["order_id"]
        status = context["status"]
        label = context.get("label") or "Order"
        return {
            "title": f"{label} #{order_id} → {status}",
            "body": context.get("note") or STATUS_CHANGED,
            "data": {
                "orderId": order_id,
                "status": status,
                "type": NotificationType.OPS_STATUS.value,
            },
        }
