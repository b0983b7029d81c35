"""Push message value object and the notification types the fabric raises."""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Dict, String, Text

from ordersync.domain import ordersync


class NotificationType(Enum):
    NEW_ORDER = "NEW_ORDER"
    ORDER_STATUS = "ORDER_STATUS"
    LOW_STOCK = "LOW_STOCK"
    OPS_NEW_ORDER = "OPS_NEW_ORDER"
    OPS_NEW_RECURRING = "OPS_NEW_RECURRING"
    OPS_STATUS = "OPS_STATUS"


@ordersync.value_object
class PushMessage:
    """Ephemeral `{title, body, data}` payload handed to the push channel.

    The data map must map strings to strings, which is all FCM accepts.
    """

    title: String(required=True, max_length=255)
    body: Text(required=True)
    data: Dict()

    @invariant.post
    def data_must_map_strings_to_strings(self):
        for key, value in (self.data or {}).items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise ValidationError({"data": [f"Push data must map strings to strings, got {key!r}: {value!r}"]})
