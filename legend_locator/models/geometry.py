from __future__ import annotations

from typing import NamedTuple, Sequence

from pydantic import BaseModel, ConfigDict


class Color(NamedTuple):
    r: int
    g: int
    b: int


class Point(NamedTuple):
    """Integer image-space coordinate, origin top-left."""

    x: int
    y: int


class Centroid(NamedTuple):
    x: float
    y: float


class BoundingBox(BaseModel):
    """Axis-aligned legend rectangle in image pixel coordinates.

    Coordinates are taken as recorded; a degenerate box (x2 <= x1 or
    y2 <= y1) is allowed and simply yields nothing to scan.
    """

    model_config = ConfigDict(frozen=True)

    x1: float
    y1: float
    x2: float
    y2: float

    @classmethod
    def from_sequence(cls, values: Sequence[float] | None) -> BoundingBox | None:
        if values is None or len(values) != 4:
            return None
        x1, y1, x2, y2 = values
        return cls(x1=x1, y1=y1, x2=x2, y2=y2)
