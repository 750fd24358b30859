"""Firebase Admin bootstrap: service account loading and client handles."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import firebase_admin
from firebase_admin import credentials, firestore_async, storage

from .config import Settings
from .errors import ServiceAccountError

logger = logging.getLogger(__name__)


def load_service_account(path: str) -> Dict[str, Any]:
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ServiceAccountError(f"Cannot read service account file {path}: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ServiceAccountError(f"Service account file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ServiceAccountError(f"Service account file {path} must contain a JSON object")
    return data


def init_firebase_app(settings: Settings) -> firebase_admin.App:
    service_account = load_service_account(settings.firebase_service_account_path)
    app = firebase_admin.initialize_app(
        credentials.Certificate(service_account),
        {"storageBucket": settings.firebase_storage_bucket},
    )
    logger.info(
        "Initialized Firebase project=%s bucket=%s",
        service_account.get("project_id"), settings.firebase_storage_bucket,
    )
    return app


def firestore_client(app: firebase_admin.App):
    return firestore_async.client(app=app)


def storage_bucket(app: firebase_admin.App):
    return storage.bucket(app=app)
