"""Push topic channel port — abstract interface for topic fan-out dispatch."""

from abc import ABC, abstractmethod


class PushTopicPort(ABC):
    """Abstract interface for topic-based push notification adapters.

    Implementations must be safe to call from several threads at once; the
    dispatcher runs each send in a worker thread.
    """

    @abstractmethod
    def send(self, topic: str, title: str, body: str) -> dict:
        """Send a push notification to every subscriber of ``topic``.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
