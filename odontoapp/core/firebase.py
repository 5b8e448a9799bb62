"""Firebase Admin app lifecycle and the async Firestore client."""

import json
import os

import firebase_admin
import structlog
from firebase_admin import credentials, firestore_async
from google.cloud.firestore import AsyncClient

logger = structlog.get_logger(__name__)

_firebase_app: firebase_admin.App | None = None


def _load_credentials(
    credentials_path: str | None, config_json: str | None
) -> credentials.Certificate | None:
    if config_json:
        logger.info("firebase_credentials_selected", source="json")
        return credentials.Certificate(json.loads(config_json))

    if credentials_path and os.path.exists(credentials_path):
        logger.info("firebase_credentials_selected", source="file", path=credentials_path)
        return credentials.Certificate(credentials_path)

    # Application Default Credentials
    return None


def initialize_firebase(
    credentials_path: str | None = None, config_json: str | None = None
) -> firebase_admin.App:
    """
    Initialize the Firebase Admin app once per process.

    A raw service-account JSON wins over a credentials file; with neither,
    the SDK falls back to Application Default Credentials.

    Raises:
        ValueError: If the service-account JSON is malformed
    """
    global _firebase_app

    if _firebase_app is None:
        try:
            cred = _load_credentials(credentials_path, config_json)
            _firebase_app = (
                firebase_admin.initialize_app(cred) if cred else firebase_admin.initialize_app()
            )
        except ValueError as e:
            logger.error("firebase_initialization_failed", error=str(e))
            raise
        logger.info("firebase_initialized", project_id=_firebase_app.project_id)

    return _firebase_app


def get_firebase_app() -> firebase_admin.App:
    """
    Get the initialized Firebase app.

    Raises:
        RuntimeError: If Firebase is not initialized
    """
    if _firebase_app is None:
        raise RuntimeError("Firebase not initialized. Call initialize_firebase() first.")
    return _firebase_app


def get_firestore_client() -> AsyncClient:
    """Return an async Firestore client bound to the initialized app."""
    return firestore_async.client(app=get_firebase_app())


def reset_firebase() -> None:
    """Delete the Firebase app so a later startup can initialize it again."""
    global _firebase_app

    if _firebase_app is not None:
        firebase_admin.delete_app(_firebase_app)
        _firebase_app = None
