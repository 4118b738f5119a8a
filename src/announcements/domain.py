"""Announcements bounded context — Firestore change feed to FCM topic fan-out.

Watches the ``events`` and ``bulletins`` collections for newly created
documents, resolves the target topic and message text for each one, and
hands the result to the push transport. Nothing is persisted; each
notification is a best-effort, single-attempt dispatch.
"""

import structlog
from protean.domain import Domain

announcements = Domain(name="announcements")

logger = structlog.get_logger(__name__)
