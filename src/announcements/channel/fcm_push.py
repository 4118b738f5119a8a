"""Firebase Cloud Messaging adapter — sends notifications to FCM topics."""

import structlog
from announcements.channel.push_port import PushTopicPort
from firebase_admin import exceptions, messaging

logger = structlog.get_logger(__name__)


class FCMPushAdapter(PushTopicPort):
    """Push adapter backed by ``firebase_admin.messaging``.

    ``messaging.send`` is a blocking HTTP call and is safe to share across
    threads, so a single adapter serves every watcher.
    """

    def __init__(self, app=None):
        self.app = app

    def send(self, topic: str, title: str, body: str) -> dict:
        message = messaging.Message(
            notification=messaging.Notification(title=title, body=body),
            topic=topic,
        )
        try:
            message_id = messaging.send(message, app=self.app)
        except exceptions.FirebaseError as e:
            return {
                "message_id": None,
                "status": "failed",
                "error": f"{e.code}: {e}",
            }
        except ValueError as e:
            # Raised by the SDK for malformed topic names.
            return {"message_id": None, "status": "failed", "error": str(e)}

        return {"message_id": message_id, "status": "sent"}
