from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional

from legend_locator.models import ImageRecord

from .base import ImageRepository

logger = logging.getLogger(__name__)


class MemoryImageRepository(ImageRepository):
    """Process-local store, used for development and tests."""

    name = "memory"

    def __init__(self) -> None:
        self._records: Dict[str, ImageRecord] = {}
        self._lock = threading.Lock()

    def list_records(self) -> List[ImageRecord]:
        with self._lock:
            return [r.model_copy() for r in self._records.values()]

    def get_record(self, image_name: str) -> Optional[ImageRecord]:
        with self._lock:
            record = self._records.get(image_name)
            return record.model_copy() if record is not None else None

    def upsert_record(self, record: ImageRecord) -> ImageRecord:
        with self._lock:
            existing = self._records.get(record.name)
            if existing is None:
                self._records[record.name] = record.model_copy()
            else:
                self._records[record.name] = existing.with_bounding_box(record.legend_bounding_box)
        logger.debug("Upserted record name=%s", record.name)
        return record

    def count(self) -> int:
        with self._lock:
            return len(self._records)
