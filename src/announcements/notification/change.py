"""Value objects describing what the change feed delivers."""

from enum import Enum

from announcements.domain import announcements
from protean.fields import Dict, String


class ChangeKind(Enum):
    ADDED = "Added"
    MODIFIED = "Modified"
    REMOVED = "Removed"


class WatchedCollection(Enum):
    EVENTS = "events"
    BULLETINS = "bulletins"


@announcements.value_object
class ChangeEvent:
    """One document mutation delivered by the change feed.

    Only ``Added`` changes lead to a notification. The record is kept as the
    raw document mapping; required fields are checked when the change is
    resolved, not here, so that a malformed document is reported against
    the change that carried it.
    """

    collection: String(required=True, max_length=100)
    change_kind: String(required=True, choices=ChangeKind)
    document_id: String(max_length=1500)
    record: Dict(default=dict)

    @property
    def is_creation(self) -> bool:
        return self.change_kind == ChangeKind.ADDED.value
