"""Firestore client (REST-based, no firebase-admin).

Built at app startup from either FIREBASE_SERVICE_ACCOUNT_KEY (JSON string)
or FIREBASE_SERVICE_ACCOUNT_PATH (file path). Uses the Firestore REST API with
google-auth, so the only runtime dependencies are httpx and google-auth.
"""

import json
from pathlib import Path

import httpx

from assetverse.core.config import Settings
from assetverse.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)
from assetverse.shared.logging import get_logger

logger = get_logger(__name__)


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise ValueError(
                f"FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: {path} (resolved: {resolved})"
            )
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def create_firestore_client(
    settings: Settings, http_client: httpx.AsyncClient | None = None
) -> FirestoreRESTClient:
    """Build the Firestore REST client from service account settings.

    Unlike optional integrations, the store is required: missing or malformed
    credentials raise ValueError so startup fails loudly.

    Args:
        settings: Loaded settings with Firebase credentials.
        http_client: Optional shared httpx client (closed by its owner).

    Returns:
        Ready FirestoreRESTClient.
    """
    key_dict = _load_key_dict(settings)
    if not key_dict:
        raise ValueError("Firestore credentials are not configured")
    project_id = key_dict.get("project_id")
    if not project_id:
        raise ValueError("Firebase service account JSON missing 'project_id'")
    cred = _get_credentials(key_dict)
    logger.info("Firestore REST client initialized for project %s", project_id)
    return FirestoreRESTClient(project_id, cred, http_client=http_client)
