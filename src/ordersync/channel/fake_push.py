"""Fake push notification adapter — records sent pushes for testing."""

from uuid import uuid4

from ordersync.channel.push_port import PushPort


class FakePushAdapter(PushPort):
    """Push adapter that records notifications in memory for test assertions."""

    def __init__(self):
        self.sent_pushes: list[dict] = []
        self.topic_pushes: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Push delivery failed"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(
        self,
        device_token: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        return self._record(self.sent_pushes, {"device_token": device_token}, title, body, data)

    def send_to_topic(
        self,
        topic: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        return self._record(self.topic_pushes, {"topic": topic}, title, body, data)

    def _record(self, outbox: list[dict], target: dict, title: str, body: str, data: dict | None) -> dict:
        if not self.should_succeed:
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        message_id = f"push-{uuid4().hex[:12]}"
        outbox.append(
            {
                "message_id": message_id,
                **target,
                "title": title,
                "body": body,
                "data": data,
            }
        )

        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        """Clear sent pushes (useful between tests)."""
        self.sent_pushes.clear()
        self.topic_pushes.clear()
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"
