"""Document store collection names and path patterns.

The store has no schema; these constants are the single source of truth
for where each order representation lives.
"""

VENDORS = "vendors"
USERS = "users"
ORDERS = "orders"
RECURRING_ORDERS = "recurringOrders"
OPS_ORDERS = "opsOrders"

VENDOR_ORDER_PATTERN = "vendors/{vendorId}/orders/{orderId}"
INVENTORY_ITEM_PATTERN = "vendors/{vendorId}/inventory/{productId}"
USER_ORDER_PATTERN = "users/{userId}/orders/{orderId}"
RECURRING_ORDER_PATTERN = "recurringOrders/{recurringId}"
OPS_ORDER_PATTERN = "opsOrders/{opsId}"

# Push topic every operations console subscribes to
OPS_TOPIC = "ops-orders"

# Field the vendor-order mirror stamps on customer copies: the vendor order path
MIRRORED_FROM = "mirroredFrom"

# Statuses that also stamp a `<status>At` timestamp on the origin order
MILESTONE_STATUSES = frozenset({"CONFIRMED", "PACKING", "OUT_FOR_DELIVERY", "NEAR_YOU", "DELIVERED"})


def vendor_path(vendor_id: str) -> str:
    return f"{VENDORS}/{vendor_id}"


def user_path(user_id: str) -> str:
    return f"{USERS}/{user_id}"


def user_order_path(user_id: str, order_id: str) -> str:
    return f"{USERS}/{user_id}/{ORDERS}/{order_id}"


def ops_order_path(order_id: str) -> str:
    return f"{OPS_ORDERS}/{order_id}"
