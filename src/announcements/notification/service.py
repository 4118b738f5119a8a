"""Runs one CollectionWatcher task per watched collection.

The watchers share the dispatcher (and through it the push channel) but no
mutable state of their own.
"""

import asyncio

import structlog
from announcements.channel.push_port import PushTopicPort
from announcements.feed.feed_port import ChangeFeedPort
from announcements.notification.change import WatchedCollection
from announcements.notification.dispatch import NotificationDispatcher
from announcements.notification.watcher import DEFAULT_RESUBSCRIBE_DELAY, CollectionWatcher

logger = structlog.get_logger(__name__)

WATCHED_COLLECTIONS = [collection.value for collection in WatchedCollection]


class NotificationService:
    def __init__(
        self,
        feed: ChangeFeedPort,
        channel: PushTopicPort,
        collections: list[str] | None = None,
        resubscribe_delay: float = DEFAULT_RESUBSCRIBE_DELAY,
    ):
        self.dispatcher = NotificationDispatcher(channel)
        self.watchers = [
            CollectionWatcher(
                collection,
                feed=feed,
                dispatcher=self.dispatcher,
                resubscribe_delay=resubscribe_delay,
            )
            for collection in (collections or WATCHED_COLLECTIONS)
        ]
        self._tasks: list[asyncio.Task] = []

    def start(self) -> list[asyncio.Task]:
        """Start every watcher as a task on the running loop."""
        self._tasks = [
            asyncio.create_task(watcher.run(), name=f"watch:{watcher.collection}") for watcher in self.watchers
        ]
        logger.info("Notification service started", collections=[w.collection for w in self.watchers])
        return self._tasks

    async def run(self) -> None:
        """Run all watchers until each of their feeds closes."""
        await asyncio.gather(*self.start())
        await self.dispatcher.drain()

    async def stop(self) -> None:
        """Cancel the watchers and wait for in-flight sends."""
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        await self.dispatcher.drain()
        logger.info("Notification service stopped")
