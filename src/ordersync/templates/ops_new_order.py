"""Ops new order template: broadcast when an instant order reaches the ops collection."""

from ordersync.notification.message import NotificationType


class OpsNewOrderTemplate:
    notification_type = NotificationType.OPS_NEW_ORDER.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context["order_id"]
        return {
            "title": "New order received",
            "body": f"Order #{order_id} placed",
            "data": {"orderId": order_id, "type": NotificationType.OPS_NEW_ORDER.value},
        }
