"""Firebase Cloud Messaging push adapter (production)."""

from firebase_admin import exceptions, messaging

from ordersync.channel.push_port import PushPort
from ordersync.firebase import get_firebase_app


class FcmPushAdapter(PushPort):
    """Delivers pushes through FCM, to a device token or to a topic."""

    def __init__(self, app=None):
        self._app = app

    @property
    def app(self):
        if self._app is None:
            self._app = get_firebase_app()
        return self._app

    def send(
        self,
        device_token: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        message = messaging.Message(
            token=device_token,
            notification=messaging.Notification(title=title, body=body),
            data=data,
        )
        return self._deliver(message)

    def send_to_topic(
        self,
        topic: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        message = messaging.Message(
            topic=topic,
            notification=messaging.Notification(title=title, body=body),
            data=data,
        )
        return self._deliver(message)

    def _deliver(self, message: messaging.Message) -> dict:
        try:
            message_id = messaging.send(message, app=self.app)
        except exceptions.FirebaseError as exc:
            return {"message_id": None, "status": "failed", "error": str(exc)}
        return {"message_id": message_id, "status": "sent"}
