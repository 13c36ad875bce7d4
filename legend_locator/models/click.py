from __future__ import annotations

from pydantic import BaseModel

from .geometry import Point


class ImageClickRequest(BaseModel):
    x: int
    y: int

    def to_point(self) -> Point:
        return Point(self.x, self.y)
