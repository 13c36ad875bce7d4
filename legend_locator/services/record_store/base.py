from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from legend_locator.models import ImageRecord


class ImageRepository(ABC):
    """Abstract key-value store of image records keyed by image name."""

    name: str = "abstract"

    @abstractmethod
    def list_records(self) -> List[ImageRecord]:
        """Return every stored record."""

    @abstractmethod
    def get_record(self, image_name: str) -> Optional[ImageRecord]:
        """Return the record for *image_name*, or None if unknown."""

    @abstractmethod
    def upsert_record(self, record: ImageRecord) -> ImageRecord:
        """Create *record*, or update the bounding box of an existing one."""

    def count(self) -> int:
        return len(self.list_records())
