from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from .geometry import BoundingBox


class LegendBoxEntry(BaseModel):
    file_name: str
    legend_bbox: Optional[List[float]] = None  # [x1, y1, x2, y2]

    @property
    def bounding_box(self) -> BoundingBox | None:
        return BoundingBox.from_sequence(self.legend_bbox)


class LegendBBoxSeedData(BaseModel):
    """Seed manifest: ``{"data": [{"file_name": ..., "legend_bbox": [...]}, ...]}``."""

    data: List[LegendBoxEntry] = []
