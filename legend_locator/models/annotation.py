"""Vector annotation document returned for a click.

The document always has a marker; the legend rectangle and the arrow to
the matched centroid are optional. ``to_svg`` renders it in the same
coordinate system as the source image.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

ARROWHEAD_ID = "arrowhead"


class AnnotationStyle(BaseModel):
    marker_radius: float = Field(5.0, gt=0)
    marker_fill: str = "black"
    outline_color: str = "black"
    outline_stroke_width: float = Field(3.0, gt=0)
    arrow_outline_color: str = "white"
    arrow_color: str = "red"
    arrow_stroke_width: float = Field(2.0, gt=0)


class Marker(BaseModel):
    cx: float
    cy: float
    r: float


class Rectangle(BaseModel):
    x: float
    y: float
    width: float
    height: float


class Arrow(BaseModel):
    x1: float
    y1: float
    x2: float
    y2: float
    head_id: str = ARROWHEAD_ID


class Annotation(BaseModel):
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    marker: Marker
    rectangle: Optional[Rectangle] = None
    arrow: Optional[Arrow] = None
    style: AnnotationStyle = AnnotationStyle()

    def to_svg(self) -> str:
        s = self.style
        lines = [
            f'<svg width="{self.width}" height="{self.height}" '
            f'viewBox="0 0 {self.width} {self.height}" xmlns="http://www.w3.org/2000/svg">',
            "    <!-- Marker at clicked location -->",
            f'    <circle cx="{_fmt(self.marker.cx)}" cy="{_fmt(self.marker.cy)}" '
            f'r="{_fmt(self.marker.r)}" fill="{s.marker_fill}" />',
        ]
        if self.rectangle is not None:
            rect = self.rectangle
            lines.append(
                f'    <rect x="{_fmt(rect.x)}" y="{_fmt(rect.y)}" '
                f'width="{_fmt(rect.width)}" height="{_fmt(rect.height)}" '
                f'fill="none" stroke="{s.outline_color}" stroke-width="{_fmt(s.outline_stroke_width)}" />'
            )
        if self.arrow is not None:
            a = self.arrow
            coords = f'x1="{_fmt(a.x1)}" y1="{_fmt(a.y1)}" x2="{_fmt(a.x2)}" y2="{_fmt(a.y2)}"'
            lines.extend(
                [
                    "    <defs>",
                    f'        <marker id="{a.head_id}" markerWidth="10" markerHeight="7" '
                    'refX="10" refY="3.5" orient="auto" markerUnits="strokeWidth">',
                    f'            <polygon points="0 0, 10 3.5, 0 7" fill="{s.arrow_color}" />',
                    "        </marker>",
                    "    </defs>",
                    f'    <line {coords} stroke="{s.arrow_outline_color}" '
                    f'stroke-width="{_fmt(s.arrow_stroke_width * 2)}" />',
                    f'    <line {coords} stroke="{s.arrow_color}" '
                    f'stroke-width="{_fmt(s.arrow_stroke_width)}" marker-end="url(#{a.head_id})" />',
                ]
            )
        lines.append("</svg>")
        return "\n".join(lines) + "\n"


def _fmt(value: float) -> str:
    """Shortest exact text for a coordinate (``5`` rather than ``5.0``)."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
