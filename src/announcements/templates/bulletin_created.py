"""Bulletin template — a new document in the ``bulletins`` collection.

Bulletins may target a single institution through ``targetInstitutionId``.
A missing value, an empty value or the sentinel ``"all"`` falls back to the
broadcast topic.
"""

from announcements.notification.change import WatchedCollection
from announcements.notification.message import truncate_description
from announcements.templates.event_created import BROADCAST_TOPIC
from announcements.templates.fields import require_text

ALL_INSTITUTIONS = "all"
INSTITUTION_TOPIC_PREFIX = "institution_"


class BulletinCreatedTemplate:
    collection = WatchedCollection.BULLETINS.value
    title_prefix = "New bulletin: "

    @staticmethod
    def resolve_topic(record: dict) -> str:
        target = record.get("targetInstitutionId")
        if target and target != ALL_INSTITUTIONS:
            return f"{INSTITUTION_TOPIC_PREFIX}{target}"
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
