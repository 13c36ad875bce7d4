"""Firebase Realtime Database backed image record store.

Records live under ``/images/{key}`` where ``key`` is the image name with
the characters Firebase forbids in keys percent-escaped. Each node holds
the ``ImageRecord`` fields, validated with Pydantic on the way in and out.
"""
from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

import firebase_admin
from firebase_admin import credentials, db

from legend_locator.config import get_settings
from legend_locator.models import ImageRecord

from .base import ImageRepository

logger = logging.getLogger(__name__)

_FORBIDDEN_KEY_CHARS = {
    "%": "%25",
    ".": "%2E",
    "$": "%24",
    "#": "%23",
    "[": "%5B",
    "]": "%5D",
    "/": "%2F",
}


def encode_key(image_name: str) -> str:
    return "".join(_FORBIDDEN_KEY_CHARS.get(ch, ch) for ch in image_name)


def _ensure_app() -> None:
    """Initialise the Firebase Admin SDK exactly once."""

    if firebase_admin._apps:  # type: ignore[attr-defined]
        return
    settings = get_settings()
    try:
        if settings.firebase_credentials_json:
            # Accept path or JSON string
            cred_obj: credentials.Base = (
                credentials.Certificate(settings.firebase_credentials_json)
                if settings.firebase_credentials_json.endswith(".json")
                else credentials.Certificate(json.loads(settings.firebase_credentials_json))
            )
        else:
            # Attempt default credentials (useful on Cloud Run with workload identity)
            cred_obj = credentials.ApplicationDefault()

        database_url = settings.firebase_database_url
        if database_url is None and settings.project_id:
            database_url = f"https://{settings.project_id}.firebaseio.com"
        firebase_admin.initialize_app(cred_obj, {"databaseURL": database_url})
        logger.info("Firebase Admin SDK initialised.")
    except Exception as exc:  # pragma: no cover
        logger.exception("Failed to initialise Firebase Admin SDK: %s", exc)
        raise


def _validate_record_dict(data: dict[str, Any]) -> dict[str, Any]:
    return ImageRecord.model_validate(data).model_dump(mode="json")


class FirebaseImageRepository(ImageRepository):
    """Wrapper around Firebase Realtime Database operations."""

    name = "firebase"

    def __init__(self, root: Any = None) -> None:
        if root is None:
            _ensure_app()
            root = db.reference("/")
        self._images = root.child("images")

    def list_records(self) -> List[ImageRecord]:
        raw_items = self._images.get() or {}
        records = [ImageRecord.model_validate(_validate_record_dict(v)) for v in raw_items.values()]
        records.sort(key=lambda r: r.name)
        return records

    def get_record(self, image_name: str) -> Optional[ImageRecord]:
        data = self._images.child(encode_key(image_name)).get()
        if data is None:
            return None
        return ImageRecord.model_validate(_validate_record_dict(data))

    def upsert_record(self, record: ImageRecord) -> ImageRecord:
        ref = self._images.child(encode_key(record.name))
        existing = ref.get()
        if existing is None:
            data = record.model_dump(mode="json")
        else:
            current = ImageRecord.model_validate(_validate_record_dict(existing))
            data = current.with_bounding_box(record.legend_bounding_box).model_dump(mode="json")
        ref.set(data)
        logger.debug("Record set for name=%s", record.name)
        return record
