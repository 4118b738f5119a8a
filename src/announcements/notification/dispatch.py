"""Notification dispatcher — sends resolved notifications via the push channel.

Each dispatch issues exactly one send as a detached asyncio task; the
caller never waits for the transport round trip. The outcome is logged by
a completion callback and never propagates: a failed send is dropped, not
retried.
"""

import asyncio
import functools

import structlog
from announcements.channel.push_port import PushTopicPort
from announcements.notification.message import NotificationMessage

logger = structlog.get_logger(__name__)


class NotificationDispatcher:
    """Fire-and-forget sender bound to a single push channel adapter."""

    def __init__(self, channel: PushTopicPort):
        self.channel = channel
        # Strong references keep in-flight tasks alive until they finish.
        self._in_flight: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._in_flight)

    def dispatch(self, topic: str, title: str, body: str) -> asyncio.Task | None:
        """Schedule one send of ``(title, body)`` to ``topic``.

        Must be called from a running event loop. Returns the send task, or
        None when the topic is empty and nothing was sent.
        """
        if not topic:
            logger.info("No topic given, notification not sent", title=title)
            return None

        task = asyncio.create_task(self._send(topic, title, body), name=f"push:{topic}")
        self._in_flight.add(task)
        task.add_done_callback(functools.partial(self._on_send_done, topic))
        return task

    def dispatch_message(self, message: NotificationMessage) -> asyncio.Task | None:
        return self.dispatch(message.topic, message.title, message.body)

    async def drain(self) -> None:
        """Wait for every in-flight send to finish."""
        if self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)

    async def _send(self, topic: str, title: str, body: str) -> dict:
        return await asyncio.to_thread(self.channel.send, topic=topic, title=title, body=body)

    def _on_send_done(self, topic: str, task: asyncio.Task) -> None:
        self._in_flight.discard(task)

        if task.cancelled():
            logger.warning("Notification send cancelled", topic=topic)
            return

        error = task.exception()
        if error is not None:
            logger.error(
                "Notification send raised",
                topic=topic,
                error=str(error),
                error_type=type(error).__name__,
            )
            return

        result = task.result() or {}
        if result.get("status") == "sent":
            logger.info(
                "Notification sent",
                topic=topic,
                message_id=result.get("message_id"),
            )
        else:
            logger.error(
                "Notification send failed",
                topic=topic,
                error=result.get("error", "Unknown dispatch error"),
            )
