"""Firebase Admin SDK bootstrap shared by the Firestore and FCM adapters."""

import os

import firebase_admin
import structlog
from firebase_admin import credentials

logger = structlog.get_logger(__name__)


def get_firebase_app() -> firebase_admin.App:
    """Return the default Firebase app, initializing it once per process.

    Uses the service-account file named by FIREBASE_CREDENTIALS when set,
    Application Default Credentials otherwise.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    credentials_path = os.environ.get("FIREBASE_CREDENTIALS")
    if credentials_path:
        cred = credentials.Certificate(credentials_path)
    else:
        cred = credentials.ApplicationDefault()

    logger.info(
        "Initializing Firebase app",
        credentials="service_account" if credentials_path else "application_default",
    )
    return firebase_admin.initialize_app(cred)
