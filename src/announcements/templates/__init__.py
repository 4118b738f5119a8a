"""Template registry — maps a watched collection to its notification template.

Each template knows how to pick the target topic for a record and how to
render the notification title and body from it.
"""

from announcements.notification.change import WatchedCollection
from announcements.templates.bulletin_created import BulletinCreatedTemplate
from announcements.templates.event_created import EventCreatedTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    WatchedCollection.EVENTS.value: EventCreatedTemplate,
    WatchedCollection.BULLETINS.value: BulletinCreatedTemplate,
}


def get_template(collection: str):
    """Look up a template class by collection name."""
    template_cls = TEMPLATE_REGISTRY.get(collection)
    if template_cls is None:
        raise ValueError(f"No template registered for collection: {collection}")
    return template_cls
