"""Shared helpers for building notification effects.

Provides the common pattern: pick template → render → wrap in a PushMessage
→ target a device token or the ops topic. A message that fails validation
is logged and dropped, so the data effects of the same change still apply.
"""

import structlog
from protean.exceptions import ValidationError

from ordersync.collections import OPS_TOPIC
from ordersync.effects import SendToToken, SendToTopic
from ordersync.notification.message import PushMessage
from ordersync.templates import get_template

logger = structlog.get_logger(__name__)


def render_message(notification_type: str, context: dict) -> PushMessage:
    rendered = get_template(notification_type).render(context)
    return PushMessage(title=rendered["title"], body=rendered["body"], data=rendered["data"])


def _try_render(notification_type: str, context: dict) -> PushMessage | None:
    try:
        return render_message(notification_type, context)
    except ValidationError as e:
        logger.error(
            "Push message rejected, skipping notification",
            notification_type=notification_type,
            order_id=context.get("order_id"),
            product_id=context.get("product_id"),
            errors=e.messages,
        )
        return None


def notify_token(token: str | None, notification_type: str, context: dict) -> list[SendToToken]:
    """Build a push to one recipient, or nothing when the recipient has no token."""
    if not token:
        logger.info(
            "Recipient has no push token, skipping notification",
            notification_type=notification_type,
            order_id=context.get("order_id"),
        )
        return []

    message = _try_render(notification_type, context)
    if message is None:
        return []
    return [SendToToken(token=token, message=message)]


def broadcast_to_ops(notification_type: str, context: dict) -> list[SendToTopic]:
    """Build a push for every operations console subscribed to the ops topic."""
    message = _try_render(notification_type, context)
    if message is None:
        return []
    return [SendToTopic(topic=OPS_TOPIC, message=message)]
