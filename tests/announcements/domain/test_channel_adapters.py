"""Tests for push channel adapters and the channel registry."""

import pytest
from announcements.channel import get_push_channel, reset_channels
from announcements.channel.fake_push import FakePushAdapter
from announcements.channel.fcm_push import FCMPushAdapter
from firebase_admin import exceptions, messaging


class TestFakePushAdapter:
    def setup_method(self):
        self.adapter = FakePushAdapter()

    def test_send_records_push(self):
        result = self.adapter.send(topic="newPosts", title="New event: Fire Drill", body="short text")
        assert result["status"] == "sent"
        assert result["message_id"] is not None
        assert len(self.adapter.sent_pushes) == 1
        assert self.adapter.sent_pushes[0]["topic"] == "newPosts"
        assert self.adapter.sent_pushes[0]["title"] == "New event: Fire Drill"

    def test_send_failure(self):
        self.adapter.configure(should_succeed=False, failure_reason="Quota exceeded")
        result = self.adapter.send(topic="newPosts", title="Hi", body="Hello")
        assert result["status"] == "failed"
        assert result["error"] == "Quota exceeded"
        assert len(self.adapter.sent_pushes) == 0
        assert len(self.adapter.attempts) == 1

    def test_reset(self):
        self.adapter.send(topic="newPosts", title="Hi", body="Hello")
        self.adapter.configure(should_succeed=False)
        self.adapter.reset()
        assert len(self.adapter.sent_pushes) == 0
        assert len(self.adapter.attempts) == 0
        assert self.adapter.should_succeed is True


class TestFCMPushAdapter:
    def test_send_builds_topic_message(self, monkeypatch):
        captured = {}

        def fake_send(message, dry_run=False, app=None):
            captured["message"] = message
            captured["app"] = app
            return "projects/demo/messages/0:123"

        monkeypatch.setattr(messaging, "send", fake_send)
        app = object()
        result = FCMPushAdapter(app=app).send(topic="institution_inst7", title="New bulletin: Exam", body="x")

        assert result == {"message_id": "projects/demo/messages/0:123", "status": "sent"}
        message = captured["message"]
        assert message.topic == "institution_inst7"
        assert message.notification.title == "New bulletin: Exam"
        assert message.notification.body == "x"
        assert captured["app"] is app

    def test_firebase_error_becomes_failed_result(self, monkeypatch):
        def failing_send(message, dry_run=False, app=None):
            raise exceptions.FirebaseError(exceptions.UNAVAILABLE, "Service unavailable")

        monkeypatch.setattr(messaging, "send", failing_send)
        result = FCMPushAdapter().send(topic="newPosts", title="Hi", body="Hello")

        assert result["status"] == "failed"
        assert result["message_id"] is None
        assert "Service unavailable" in result["error"]

    def test_unexpected_error_propagates(self, monkeypatch):
        def exploding_send(message, dry_run=False, app=None):
            raise RuntimeError("socket closed")

        monkeypatch.setattr(messaging, "send", exploding_send)
        with pytest.raises(RuntimeError):
            FCMPushAdapter().send(topic="newPosts", title="Hi", body="Hello")


# ---------------------------------------------------------------
# Channel registry
# ---------------------------------------------------------------
class TestChannelRegistry:
    def setup_method(self):
        reset_channels()

    def teardown_method(self):
        reset_channels()

    def test_fake_adapter_selected(self, monkeypatch):
        monkeypatch.setenv("ANNOUNCEMENTS_ADAPTER", "fake")
        assert isinstance(get_push_channel(), FakePushAdapter)

    def test_singleton(self, monkeypatch):
        monkeypatch.setenv("ANNOUNCEMENTS_ADAPTER", "fake")
        assert get_push_channel() is get_push_channel()

    def test_reset_creates_new_instance(self, monkeypatch):
        monkeypatch.setenv("ANNOUNCEMENTS_ADAPTER", "fake")
        first = get_push_channel()
        reset_channels()
        assert get_push_channel() is not first

    def test_firebase_adapter_uses_firebase_app(self, monkeypatch):
        monkeypatch.setenv("ANNOUNCEMENTS_ADAPTER", "firebase")
        sentinel = object()
        monkeypatch.setattr("announcements.firebase.get_firebase_app", lambda: sentinel)

        channel = get_push_channel()
        assert isinstance(channel, FCMPushAdapter)
        assert channel.app is sentinel
