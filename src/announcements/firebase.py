"""Firebase Admin bootstrap shared by the Firestore feed and the FCM channel."""

import firebase_admin
import structlog
from announcements.config import load_service_account
from announcements.exceptions import CredentialsError
from firebase_admin import credentials

logger = structlog.get_logger(__name__)

_app = None


def get_firebase_app(service_account=None):
    """Return the initialized Firebase app (singleton).

    The credential is loaded on first use; see ``load_service_account`` for
    the lookup order.

    Raises:
        CredentialsError: the credential is missing or rejected by the SDK.
    """
    global _app
    if _app is None:
        account = load_service_account(service_account)
        try:
            cert = credentials.Certificate(account)
        except ValueError as e:
            raise CredentialsError(f"Service account rejected: {e}") from e
        _app = firebase_admin.initialize_app(cert)
        logger.info("Firebase app initialized", project_id=account.get("project_id"))
    return _app


def reset_firebase_app():
    """Tear down the Firebase app singleton (useful for testing)."""
    global _app
    if _app is not None:
        firebase_admin.delete_app(_app)
    _app = None
