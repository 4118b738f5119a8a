"""Topic resolver — maps a watched collection and a record to a NotificationMessage.

Pure functions: no I/O, no shared state, safe to call from any task.
"""

from announcements.notification.change import ChangeEvent
from announcements.notification.message import NotificationMessage
from announcements.templates import get_template


def resolve_notification(collection: str, record: dict) -> NotificationMessage:
    """Build the notification for a newly created record.

    Raises:
        ValueError: no template is registered for ``collection``.
        ValidationError: the record lacks a string ``title`` or ``description``.
    """
    rendered = get_template(collection).render(record)
    return NotificationMessage(
        topic=rendered["topic"],
        title=rendered["title"],
        body=rendered["body"],
    )


def resolve_change(change: ChangeEvent) -> NotificationMessage | None:
    """Resolve a change, or return None when it is not a creation."""
    if not change.is_creation:
        return None
    return resolve_notification(change.collection, change.record or {})
