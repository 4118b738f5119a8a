"""Firestore change feed — bridges ``on_snapshot`` listeners into asyncio.

The Firestore SDK invokes snapshot callbacks on its own background thread.
Each callback converts the document changes into ChangeEvents and hands the
batch to the subscribing task's loop with ``call_soon_threadsafe``.
"""

import asyncio

import structlog
from announcements.feed.feed_port import ChangeFeedPort
from announcements.notification.change import ChangeEvent, ChangeKind
from firebase_admin import firestore

logger = structlog.get_logger(__name__)

_CHANGE_TYPES = {
    "ADDED": ChangeKind.ADDED.value,
    "MODIFIED": ChangeKind.MODIFIED.value,
    "REMOVED": ChangeKind.REMOVED.value,
}


def to_change_event(collection: str, change) -> ChangeEvent:
    """Convert a Firestore ``DocumentChange`` into a ChangeEvent."""
    document = change.document
    return ChangeEvent(
        collection=collection,
        change_kind=_CHANGE_TYPES[change.type.name],
        document_id=document.id,
        record=document.to_dict() or {},
    )


DEFAULT_LIVENESS_INTERVAL = 5.0


class FirestoreChangeFeed(ChangeFeedPort):
    """Change feed backed by Firestore collection snapshot listeners.

    Note that the first snapshot of a listener reports every existing
    document as ADDED, so every new subscription re-reports them.

    The SDK closes a listener on its own thread after an unrecoverable RPC
    error and stops calling back. While no snapshot arrives the listener is
    checked every ``liveness_interval`` seconds, and a closed one ends the
    subscription with ``ConnectionError``.
    """

    def __init__(self, app=None, client=None, liveness_interval: float = DEFAULT_LIVENESS_INTERVAL):
        self.client = client if client is not None else firestore.client(app)
        self.liveness_interval = liveness_interval

    async def subscribe(self, collection: str):
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue()

        def on_snapshot(_snapshot, changes, _read_time):
            batch = []
            for change in changes:
                try:
                    batch.append(to_change_event(collection, change))
                except Exception:
                    logger.exception(
                        "Failed to read document change",
                        collection=collection,
                        document_id=getattr(change.document, "id", None),
                    )
            try:
                loop.call_soon_threadsafe(queue.put_nowait, batch)
            except RuntimeError:
                # Loop already closed; the listener is being torn down.
                logger.debug("Dropping snapshot after loop shutdown", collection=collection)

        watch = self.client.collection(collection).on_snapshot(on_snapshot)
        logger.info("Firestore listener attached", collection=collection)
        try:
            while True:
                try:
                    batch = await asyncio.wait_for(queue.get(), self.liveness_interval)
                except TimeoutError:
                    if not watch.is_active:
                        raise ConnectionError(f"Firestore listener for {collection!r} closed") from None
                    continue
                yield batch
        finally:
            watch.unsubscribe()
            logger.info("Firestore listener detached", collection=collection)
