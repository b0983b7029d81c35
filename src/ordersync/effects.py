"""Effects returned by change handlers.

Handlers only read from the store; everything they want to happen is
returned as an effect and carried out by the fabric.
"""

from dataclasses import dataclass

from ordersync.notification.message import PushMessage


@dataclass(frozen=True)
class MergeWrite:
    """Merge `changes` into the document at `path`."""

    path: str
    changes: dict


@dataclass(frozen=True)
class SendToToken:
    """Push `message` to one device."""

    token: str
    message: PushMessage


@dataclass(frozen=True)
class SendToTopic:
    """Push `message` to every subscriber of `topic`."""

    topic: str
    message: PushMessage


Effect = MergeWrite | SendToToken | SendToTopic
