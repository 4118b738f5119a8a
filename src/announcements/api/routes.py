"""Liveness route for the announcements service.

Carries no business semantics: a 200 means the process is up.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])

LIVENESS_MESSAGE = "Announcements notifier is online and watching Firestore for changes!"


@router.get("/", response_class=PlainTextResponse)
async def liveness() -> str:
    return LIVENESS_MESSAGE
