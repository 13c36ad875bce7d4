from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .geometry import BoundingBox


class ImageRecord(BaseModel):
    """Metadata stored for one image, keyed by its file name."""

    name: str = Field(..., min_length=1)
    x1: Optional[float] = None
    y1: Optional[float] = None
    x2: Optional[float] = None
    y2: Optional[float] = None

    @property
    def legend_bounding_box(self) -> BoundingBox | None:
        """The legend box, or None unless all four coordinates are set."""
        if None in (self.x1, self.y1, self.x2, self.y2):
            return None
        return BoundingBox(x1=self.x1, y1=self.y1, x2=self.x2, y2=self.y2)

    def with_bounding_box(self, box: BoundingBox | None) -> ImageRecord:
        if box is None:
            return self.model_copy(update={"x1": None, "y1": None, "x2": None, "y2": None})
        return self.model_copy(update={"x1": box.x1, "y1": box.y1, "x2": box.x2, "y2": box.y2})
