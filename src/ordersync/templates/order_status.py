"""Order status template: tells the customer their vendor moved the order."""

from ordersync.notification.message import NotificationType


class OrderStatusTemplate:
    notification_type = NotificationType.ORDER_STATUS.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context["order_id"]
        status = context["status"]
        vendor_name = context.get("vendor_name") or "has"
        return {
            "title": f"Order {order_id} is {status}",
            "body": f"Vendor {vendor_name} marked it {status.lower()}",
            "data": {
                "orderId": order_id,
                "status": status,
                "type": NotificationType.ORDER_STATUS.value,
            },
        }
