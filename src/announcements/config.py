"""Environment-driven settings for the announcements service."""

import json
import os
from collections.abc import Mapping
from pathlib import Path

import structlog
from announcements.exceptions import ConfigurationError, CredentialsError

logger = structlog.get_logger(__name__)

DEFAULT_PORT = 3000
DEFAULT_ADAPTER = "firebase"
ADAPTERS = ("firebase", "fake")
DEFAULT_SERVICE_ACCOUNT_FILE = "serviceAccountKey.json"


def validate_port(port: int) -> int:
    if not 0 < port < 65536:
        raise ConfigurationError(f"PORT out of range: {port}")
    return port


def get_port() -> int:
    """HTTP listen port from ``PORT`` (default 3000)."""
    raw = os.environ.get("PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {raw!r}") from None
    return validate_port(port)


def get_adapter_name() -> str:
    """Adapter family for the change feed and push transport.

    ``firebase`` talks to Firestore and FCM; ``fake`` keeps everything in
    memory for tests and local runs.
    """
    name = os.environ.get("ANNOUNCEMENTS_ADAPTER", DEFAULT_ADAPTER).strip().lower()
    if name not in ADAPTERS:
        raise ConfigurationError(f"Unknown adapter: {name!r} (expected one of {', '.join(ADAPTERS)})")
    return name


def load_service_account(raw: Mapping | str | None = None) -> dict:
    """Return the Firebase service-account credential as a dict.

    Resolution order: an explicit mapping or JSON string passed in, then the
    ``FIREBASE_SERVICE_ACCOUNT`` variable (raw JSON, as set on hosted
    deployments), then the file named by ``FIREBASE_SERVICE_ACCOUNT_FILE``
    (``serviceAccountKey.json`` in the working directory by default).

    Raises:
        CredentialsError: nothing was found or the content is not a JSON object.
    """
    if isinstance(raw, Mapping):
        return dict(raw)

    if raw is None:
        raw = os.environ.get("FIREBASE_SERVICE_ACCOUNT")
        source = "FIREBASE_SERVICE_ACCOUNT"
    else:
        source = "argument"

    if raw is None:
        path = Path(os.environ.get("FIREBASE_SERVICE_ACCOUNT_FILE", DEFAULT_SERVICE_ACCOUNT_FILE))
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CredentialsError(
                f"Service account file {str(path)!r} could not be read; set FIREBASE_SERVICE_ACCOUNT "
                "or place the key file in the working directory"
            ) from e
        source = str(path)

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CredentialsError(f"Service account from {source} is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise CredentialsError(f"Service account from {source} must be a JSON object")

    logger.info("Service account credential loaded", source=source)
    return parsed
