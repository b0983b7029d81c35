"""Ops new recurring order template: broadcast when a subscription order is aggregated."""

from ordersync.notification.message import NotificationType


class OpsNewRecurringTemplate:
    notification_type = NotificationType.OPS_NEW_RECURRING.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context["order_id"]
        words = ["Recurring", context.get("mode") or "", "order", f"#{order_id}"]
        return {
            "title": "New recurring order",
            "body": " ".join(word for word in words if word),
            "data": {"orderId": order_id, "type": NotificationType.OPS_NEW_RECURRING.value},
        }
