"""Shared BDD fixtures and step definitions for the Announcements domain."""

import asyncio

import pytest
from announcements.channel.fake_push import FakePushAdapter
from announcements.feed.fake_feed import FakeChangeFeed
from announcements.notification.change import ChangeEvent, ChangeKind
from announcements.notification.dispatch import NotificationDispatcher
from announcements.notification.watcher import CollectionWatcher
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def channel():
    return FakePushAdapter()


@pytest.fixture()
def feed():
    return FakeChangeFeed()


@pytest.fixture()
def pending_changes():
    """Changes queued by Given steps, keyed by collection."""
    return {}


def deliver(feed, channel, pending_changes):
    """Publish the queued changes and run one watcher per collection to completion."""
    dispatcher = NotificationDispatcher(channel)
    watchers = []
    for collection, changes in pending_changes.items():
        feed.publish(collection, changes)
        feed.close(collection)
        watchers.append(CollectionWatcher(collection, feed=feed, dispatcher=dispatcher))
    pending_changes.clear()

    async def scenario():
        await asyncio.gather(*(watcher.run() for watcher in watchers))
        await dispatcher.drain()

    asyncio.run(scenario())


def _queue(pending_changes, collection, kind, record):
    changes = pending_changes.setdefault(collection, [])
    changes.append(
        ChangeEvent(
            collection=collection,
            change_kind=kind,
            document_id=f"{collection}-{len(changes) + 1}",
            record=record,
        )
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a new "{collection}" record titled "{title}" with description "{description}"'))
def new_record(pending_changes, collection, title, description):
    _queue(pending_changes, collection, ChangeKind.ADDED.value, {"title": title, "description": description})


@given(
    parsers.cfparse(
        'a new "{collection}" record for institution "{target}" titled "{title}" with description "{description}"'
    )
)
def new_targeted_record(pending_changes, collection, title, description, target):
    _queue(
        pending_changes,
        collection,
        ChangeKind.ADDED.value,
        {"title": title, "description": description, "targetInstitutionId": target},
    )


@given(
    parsers.cfparse(
        'a new "{collection}" record for institution "{target}" titled "{title}" with {count:d} "{char}" characters'
    )
)
def new_long_record(pending_changes, collection, title, count, char, target):
    _queue(
        pending_changes,
        collection,
        ChangeKind.ADDED.value,
        {"title": title, "description": char * count, "targetInstitutionId": target},
    )


@given(parsers.cfparse('a "{kind}" change on "{collection}" titled "{title}"'))
def other_change(pending_changes, kind, collection, title):
    _queue(pending_changes, collection, kind, {"title": title, "description": "changed"})


@given("the push transport is failing")
def failing_transport(channel):
    channel.configure(should_succeed=False, failure_reason="FCM unavailable")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the change feed delivers the batch")
def feed_delivers(feed, channel, pending_changes):
    deliver(feed, channel, pending_changes)


@when("the push transport recovers")
def transport_recovers(channel):
    channel.configure(should_succeed=True)


@when(parsers.cfparse('a new "{collection}" record titled "{title}" with description "{description}" arrives'))
def record_arrives(feed, channel, pending_changes, collection, title, description):
    _queue(pending_changes, collection, ChangeKind.ADDED.value, {"title": title, "description": description})
    deliver(feed, channel, pending_changes)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('a notification is sent to "{topic}" titled "{title}" with body "{body}"'))
def notification_sent(channel, topic, title, body):
    assert [(p["topic"], p["title"], p["body"]) for p in channel.sent_pushes] == [(topic, title, body)]


@then(
    parsers.cfparse(
        'a notification is sent to "{topic}" titled "{title}" with {count:d} "{char}" characters and an ellipsis'
    )
)
def truncated_notification_sent(channel, topic, title, count, char):
    assert [(p["topic"], p["title"], p["body"]) for p in channel.sent_pushes] == [(topic, title, char * count + "...")]


@then("no notification is sent")
def nothing_sent(channel):
    assert channel.attempts == []


@then(parsers.cfparse("{count:d} send attempts were made"))
def attempts_made(channel, count):
    assert len(channel.attempts) == count
