"""Push channel registry — pluggable topic notification transport.

Provides singleton access to the push adapter. The adapter family is chosen
by the ``ANNOUNCEMENTS_ADAPTER`` environment variable: ``firebase`` for FCM,
``fake`` for the in-memory recorder.
"""

from announcements.config import get_adapter_name

_channel_instance = None


def get_push_channel():
    """Return the configured push adapter (singleton)."""
    global _channel_instance
    if _channel_instance is None:
        adapter = get_adapter_name()
        if adapter == "fake":
            from announcements.channel.fake_push import FakePushAdapter

            _channel_instance = FakePushAdapter()
        else:
            from announcements.channel.fcm_push import FCMPushAdapter
            from announcements.firebase import get_firebase_app

            _channel_instance = FCMPushAdapter(app=get_firebase_app())
    return _channel_instance


def reset_channels():
    """Reset the push adapter singleton (useful for testing)."""
    global _channel_instance
    _channel_instance = None
