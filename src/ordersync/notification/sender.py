"""Best-effort notification sender.

Push delivery is a side channel: a failed send is logged and reported as
False, never raised. There is no retry queue.
"""

import structlog

from ordersync.channel import get_channel
from ordersync.channel.push_port import PushPort
from ordersync.effects import SendToToken, SendToTopic

logger = structlog.get_logger(__name__)


class NotificationSender:
    """Sends push effects through the configured channel adapter."""

    def __init__(self, channel: PushPort | None = None):
        self._channel = channel

    @property
    def channel(self) -> PushPort:
        return self._channel if self._channel is not None else get_channel()

    def deliver(self, effect: SendToToken | SendToTopic) -> bool:
        """Send one push effect. Returns True when the channel accepted it."""
        message = effect.message
        data = dict(message.data or {})
        target = {"topic": effect.topic} if isinstance(effect, SendToTopic) else {"token": effect.token}

        try:
            if isinstance(effect, SendToTopic):
                result = self.channel.send_to_topic(
                    topic=effect.topic,
                    title=message.title,
                    body=message.body,
                    data=data,
                )
            else:
                result = self.channel.send(
                    device_token=effect.token,
                    title=message.title,
                    body=message.body,
                    data=data,
                )
        except Exception as e:
            logger.error(
                "Push send failed",
                notification_type=data.get("type"),
                error=str(e),
                **target,
            )
            return False

        if result.get("status") != "sent":
            logger.error(
                "Push send rejected by channel",
                notification_type=data.get("type"),
                error=result.get("error", "Unknown dispatch error"),
                **target,
            )
            return False

        logger.info(
            "Push sent",
            notification_type=data.get("type"),
            message_id=result.get("message_id"),
            **target,
        )
        return True
