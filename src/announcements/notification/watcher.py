"""Collection watcher — turns a change feed subscription into notifications.

One watcher runs per watched collection for the lifetime of the process.
Every change is handled on its own: a malformed record or a failing
dispatch is logged against that change and the loop moves on.
"""

import asyncio
from collections.abc import Callable

import structlog
from announcements.feed.feed_port import ChangeFeedPort
from announcements.notification.change import ChangeEvent
from announcements.notification.dispatch import NotificationDispatcher
from announcements.notification.message import NotificationMessage
from announcements.notification.resolver import resolve_notification

logger = structlog.get_logger(__name__)

DEFAULT_RESUBSCRIBE_DELAY = 5.0


class CollectionWatcher:
    """Consumes one collection's change feed and dispatches creations."""

    def __init__(
        self,
        collection: str,
        feed: ChangeFeedPort,
        dispatcher: NotificationDispatcher,
        resolver: Callable[[str, dict], NotificationMessage] = resolve_notification,
        resubscribe_delay: float = DEFAULT_RESUBSCRIBE_DELAY,
    ):
        self.collection = collection
        self.feed = feed
        self.dispatcher = dispatcher
        self.resolver = resolver
        self.resubscribe_delay = resubscribe_delay

        self.processed = 0
        self.skipped = 0
        self.failed = 0

    async def run(self) -> None:
        """Consume batches until the feed closes or the task is cancelled.

        A subscription that fails is logged and opened again after
        ``resubscribe_delay`` seconds.
        """
        logger.info("Watching collection", collection=self.collection)
        while True:
            try:
                async for batch in self.feed.subscribe(self.collection):
                    self.process_batch(batch)
            except asyncio.CancelledError:
                logger.info("Watcher stopped", collection=self.collection)
                raise
            except Exception as e:
                logger.error(
                    "Change feed subscription failed, resubscribing",
                    collection=self.collection,
                    error=str(e),
                    retry_in=self.resubscribe_delay,
                )
                await asyncio.sleep(self.resubscribe_delay)
                continue

            logger.info("Change feed closed", collection=self.collection)
            return

    def process_batch(self, batch: list[ChangeEvent]) -> None:
        for change in batch:
            self.process_change(change)

    def process_change(self, change: ChangeEvent) -> asyncio.Task | None:
        """Dispatch a notification if ``change`` is a creation.

        Never raises; returns the send task when one was scheduled.
        """
        try:
            if not change.is_creation:
                self.skipped += 1
                logger.debug(
                    "Ignoring non-creation change",
                    collection=self.collection,
                    change_kind=change.change_kind,
                    document_id=change.document_id,
                )
                return None

            record = change.record or {}
            logger.info(
                "New record detected",
                collection=self.collection,
                document_id=change.document_id,
                title=record.get("title"),
            )
            message = self.resolver(self.collection, record)
            task = self.dispatcher.dispatch_message(message)
        except Exception as e:
            self.failed += 1
            logger.error(
                "Failed to process change",
                collection=self.collection,
                document_id=getattr(change, "document_id", None),
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        self.processed += 1
        return task
