"""Fake push adapter — records topic notifications for testing."""

import threading
from uuid import uuid4

from announcements.channel.push_port import PushTopicPort


class FakePushAdapter(PushTopicPort):
    """Push adapter that records notifications in memory for test assertions."""

    def __init__(self):
        self.sent_pushes: list[dict] = []
        self.attempts: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"
        self._lock = threading.Lock()

    def configure(self, should_succeed: bool = True, failure_reason: str = "Push delivery failed"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, topic: str, title: str, body: str) -> dict:
        with self._lock:
            self.attempts.append({"topic": topic, "title": title, "body": body})

            if not self.should_succeed:
                return {
                    "message_id": None,
                    "status": "failed",
                    "error": self.failure_reason,
                }

            message_id = f"projects/fake/messages/{uuid4().hex[:12]}"
            self.sent_pushes.append(
                {
                    "message_id": message_id,
                    "topic": topic,
                    "title": title,
                    "body": body,
                }
            )

        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        """Clear recorded pushes (useful between tests)."""
        with self._lock:
            self.sent_pushes.clear()
            self.attempts.clear()
        self.should_succeed = True
        self.failure_reason = "Push delivery failed"
