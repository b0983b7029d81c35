"""Template registry — maps NotificationType to template classes.

Each template knows how to render a push title, body and data map from
handler context.
"""

from ordersync.notification.message import NotificationType
from ordersync.templates.low_stock import LowStockTemplate
from ordersync.templates.new_order import NewOrderTemplate
from ordersync.templates.ops_new_order import OpsNewOrderTemplate
from ordersync.templates.ops_new_recurring import OpsNewRecurringTemplate
from ordersync.templates.ops_status import OpsStatusTemplate
from ordersync.templates.order_status import OrderStatusTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.NEW_ORDER.value: NewOrderTemplate,
    NotificationType.ORDER_STATUS.value: OrderStatusTemplate,
    NotificationType.LOW_STOCK.value: LowStockTemplate,
    NotificationType.OPS_NEW_ORDER.value: OpsNewOrderTemplate,
    NotificationType.OPS_NEW_RECURRING.value: OpsNewRecurringTemplate,
    NotificationType.OPS_STATUS.value: OpsStatusTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
