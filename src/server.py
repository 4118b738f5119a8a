"""Announcements server entry point.

Loads configuration and Firebase credentials, then serves the FastAPI app
(liveness endpoint plus the collection watchers) under uvicorn. Missing or
malformed credentials stop the process before any watcher is started.

Usage:
    python src/server.py                 # Port from $PORT, default 3000
    python src/server.py --port 8080
    python src/server.py --adapter fake  # In-memory feed and push channel
"""

import argparse
import os
import sys

import structlog
import uvicorn
from announcements.config import get_adapter_name, get_port, validate_port
from announcements.domain import announcements
from announcements.exceptions import AnnouncementsError
from announcements.utils.logging import configure_logging

logger = structlog.get_logger(__name__)


def bootstrap(adapter: str) -> None:
    """Initialize Firebase when it is in use, then the domain."""
    if adapter == "firebase":
        from announcements.firebase import get_firebase_app

        get_firebase_app()
    announcements.init()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Announcements notifier server")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: $PORT or 3000)")
    parser.add_argument(
        "--adapter",
        choices=["firebase", "fake"],
        help="Feed and push adapter family (default: $ANNOUNCEMENTS_ADAPTER or firebase)",
    )
    args = parser.parse_args(argv)

    configure_logging()

    if args.adapter:
        os.environ["ANNOUNCEMENTS_ADAPTER"] = args.adapter

    try:
        adapter = get_adapter_name()
        port = validate_port(args.port) if args.port is not None else get_port()
        bootstrap(adapter)
    except AnnouncementsError as e:
        logger.error("Startup failed", error=str(e))
        sys.exit(1)

    from app import app

    logger.info("Starting server", host=args.host, port=port, adapter=adapter)
    uvicorn.run(app, host=args.host, port=port)


if __name__ == "__main__":
    main()
