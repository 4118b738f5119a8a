"""Change feed port — abstract interface for document-store change subscriptions."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from announcements.notification.change import ChangeEvent


class ChangeFeedPort(ABC):
    """Abstract interface for change feed adapters."""

    @abstractmethod
    def subscribe(self, collection: str) -> AsyncIterator[list[ChangeEvent]]:
        """Open a long-lived subscription on ``collection``.

        Returns an async iterator yielding one list of ChangeEvents per batch
        delivered by the store. The iterator ends when the feed is closed and
        releases the underlying listener when the consumer stops iterating.
        """
        ...
