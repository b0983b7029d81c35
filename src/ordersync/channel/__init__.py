"""Push channel registry — pluggable notification dispatch channel.

Provides singleton access to the push adapter. Uses the fake adapter by
default; FCM can be configured via the PUSH_ADAPTER environment variable
in production ("fake" or "fcm").
"""

import os

from ordersync.channel.push_port import PushPort

_channel_instance: PushPort | None = None


def get_channel() -> PushPort:
    """Return the configured push adapter (singleton)."""
    global _channel_instance
    if _channel_instance is None:
        adapter = os.environ.get("PUSH_ADAPTER", "fake")
        if adapter == "fake":
            from ordersync.channel.fake_push import FakePushAdapter

            _channel_instance = FakePushAdapter()
        elif adapter == "fcm":
            from ordersync.channel.fcm_push import FcmPushAdapter

            _channel_instance = FcmPushAdapter()
        else:
            raise ValueError(f"Unknown push adapter: {adapter}")
    return _channel_instance


def set_channel(channel: PushPort) -> None:
    """Override the active push adapter (useful for tests)."""
    global _channel_instance
    _channel_instance = channel


def reset_channel() -> None:
    """Reset the channel singleton (useful for testing)."""
    global _channel_instance
    _channel_instance = None
