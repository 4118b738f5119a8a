"""The NotificationMessage value object and body truncation."""

from announcements.domain import announcements
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String, Text

BODY_PREVIEW_LENGTH = 100
TRUNCATION_MARKER = "..."
MAX_BODY_LENGTH = BODY_PREVIEW_LENGTH + len(TRUNCATION_MARKER)


@announcements.value_object
class NotificationMessage:
    """A resolved push notification: target topic plus display text.

    The topic is never empty; the body is at most 100 characters of the
    source description followed by an optional truncation marker.
    """

    topic: Text(required=True, sanitize=False)
    title: Text(default="", sanitize=False)
    body: String(max_length=MAX_BODY_LENGTH, default="", sanitize=False)

    @invariant.post
    def topic_must_not_be_blank(self):
        if not self.topic or not self.topic.strip():
            raise ValidationError({"topic": ["Topic must not be blank"]})

    @invariant.post
    def body_must_fit_preview(self):
        if self.body and len(self.body) > MAX_BODY_LENGTH:
            raise ValidationError({"body": [f"Body exceeds {MAX_BODY_LENGTH} characters"]})


def truncate_description(description: str) -> str:
    """Return the notification body for a description.

    Keeps the first 100 characters and appends ``...`` only when the
    description was longer than that. Counts raw characters, so the cut
    may land mid-word.
    """
    if len(description) > BODY_PREVIEW_LENGTH:
        return description[:BODY_PREVIEW_LENGTH] + TRUNCATION_MARKER
    return description
