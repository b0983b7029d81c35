"""New order template: sent to the vendor when an order first lands."""

from ordersync.notification.message import NotificationType


class NewOrderTemplate:
    notification_type = NotificationType.NEW_ORDER.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context["order_id"]
        customer_name = context.get("customer_name") or "a customer"
        return {
            "title": f"New order #{order_id}",
            "body": f"Order received from {customer_name}",
            "data": {"orderId": order_id, "type": NotificationType.NEW_ORDER.value},
        }
