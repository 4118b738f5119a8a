"""Change feed registry."""

from announcements.config import get_adapter_name

_feed_instance = None


def get_feed():
    """Return the configured change feed (singleton).

    Uses Firestore unless ``ANNOUNCEMENTS_ADAPTER`` selects the fake feed.
    """
    global _feed_instance
    if _feed_instance is None:
        adapter = get_adapter_name()
        if adapter == "fake":
            from announcements.feed.fake_feed import FakeChangeFeed

            _feed_instance = FakeChangeFeed()
        else:
            from announcements.feed.firestore_feed import FirestoreChangeFeed
            from announcements.firebase import get_firebase_app

            _feed_instance = FirestoreChangeFeed(app=get_firebase_app())
    return _feed_instance


def reset_feed():
    """Reset the change feed singleton (useful for testing)."""
    global _feed_instance
    _feed_instance = None
