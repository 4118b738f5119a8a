"""Announcements FastAPI application.

Serves the liveness endpoint and, for the lifetime of the app, runs the
notification service that watches Firestore and pushes to FCM. Start it
through ``server.py``, which loads credentials and initializes the domain
first.
"""

from contextlib import asynccontextmanager

import structlog
from announcements.api.routes import router as health_router
from announcements.channel import get_push_channel
from announcements.feed import get_feed
from announcements.notification.service import NotificationService
from fastapi import FastAPI

logger = structlog.get_logger(__name__)


def build_service() -> NotificationService:
    """Wire the configured feed and push adapters into a service."""
    return NotificationService(feed=get_feed(), channel=get_push_channel())


@asynccontextmanager
async def lifespan(app: FastAPI):
    service = build_service()
    app.state.notification_service = service
    service.start()
    try:
        yield
    finally:
        await service.stop()


app = FastAPI(
    title="Announcements Notifier",
    description="Pushes FCM topic notifications for new events and bulletins",
    lifespan=lifespan,
)

app.include_router(health_router)
