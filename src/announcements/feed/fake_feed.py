"""Fake change feed — in-memory batches for testing and local runs."""

import asyncio
from collections import defaultdict

from announcements.feed.feed_port import ChangeFeedPort
from announcements.notification.change import ChangeEvent, ChangeKind

_CLOSED = object()


class FakeChangeFeed(ChangeFeedPort):
    """Change feed whose batches are pushed by the test.

    ``publish`` queues a batch for a collection, ``fail`` queues an error that
    the subscription raises when it reaches it, and ``close`` ends the
    subscription once everything queued before it has been consumed.

    Items published while nobody is subscribed wait in a backlog. Each
    subscription gets its own queue on the running loop, and hands whatever
    it did not consume back to the backlog when it ends.
    """

    def __init__(self):
        self._backlog: dict[str, list] = defaultdict(list)
        self._live: dict[str, asyncio.Queue] = {}
        self.subscriptions: list[str] = []

    def _put(self, collection: str, item):
        queue = self._live.get(collection)
        if queue is None:
            self._backlog[collection].append(item)
        else:
            queue.put_nowait(item)

    def publish(self, collection: str, changes: list[ChangeEvent]):
        self._put(collection, list(changes))

    def publish_records(self, collection: str, *records: dict, change_kind: str = ChangeKind.ADDED.value):
        """Queue one batch of changes of a single kind built from plain records."""
        self.publish(
            collection,
            [
                ChangeEvent(
                    collection=collection,
                    change_kind=change_kind,
                    document_id=f"doc-{index}",
                    record=record,
                )
                for index, record in enumerate(records, start=1)
            ],
        )

    def fail(self, collection: str, error: Exception):
        self._put(collection, error)

    def close(self, collection: str | None = None):
        targets = [collection] if collection else list({*self._backlog, *self._live})
        for name in targets:
            self._put(name, _CLOSED)

    async def subscribe(self, collection: str):
        self.subscriptions.append(collection)
        queue: asyncio.Queue = asyncio.Queue()
        for item in self._backlog.pop(collection, []):
            queue.put_nowait(item)
        self._live[collection] = queue
        try:
            while True:
                item = await queue.get()
                if item is _CLOSED:
                    return
                if isinstance(item, Exception):
                    raise item
                yield item
        finally:
            self._live.pop(collection, None)
            leftover = []
            while not queue.empty():
                leftover.append(queue.get_nowait())
            if leftover:
                self._backlog[collection] = leftover
