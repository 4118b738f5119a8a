"""Event template — a new document in the ``events`` collection."""

from announcements.notification.change import WatchedCollection
from announcements.notification.message import truncate_description
from announcements.templates.fields import require_text

BROADCAST_TOPIC = "newPosts"


class EventCreatedTemplate:
    collection = WatchedCollection.EVENTS.value
    title_prefix = "New event: "

    @staticmethod
    def resolve_topic(record: dict) -> str:
        # Events are public; every subscriber gets them.
        return BROADCAST_TOPIC

    @classmethod
    def render(cls, record: dict) -> dict:
        title = require_text(record, "title")
        description = require_text(record, "description")
        return {
            "topic": cls.resolve_topic(record),
            "title": f"{cls.title_prefix}{title}",
            "body": truncate_description(description),
        }
