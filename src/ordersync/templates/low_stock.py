"""Low stock template: alerts the vendor when an item crosses its reorder threshold."""

from ordersync.notification.message import NotificationType


class LowStockTemplate:
    notification_type = NotificationType.LOW_STOCK.value

    @staticmethod
    def render(context: dict) -> dict:
        item_name = context.get("item_name") or "Item"
        stock_qty = float(context.get("stock_qty", 0))
        threshold = float(context.get("threshold", 0))
        return {
            "title": f"{item_name} is running low",
            "body": f"Stock is {stock_qty:.1f} and below your threshold of {threshold:.1f}",
            "data": {"productId": context["product_id"], "type": NotificationType.LOW_STOCK.value},
        }
