"""Pixel sampling, legend-region colour matching and centroid aggregation."""
from __future__ import annotations

import logging
import math
from typing import Sequence

from PIL import Image

from legend_locator.models import BoundingBox, Centroid, Color, Point

from .errors import OutOfBounds

logger = logging.getLogger(__name__)


def _as_rgb(image: Image.Image) -> Image.Image:
    return image if image.mode == "RGB" else image.convert("RGB")


def in_bounds(image: Image.Image, point: Point) -> bool:
    width, height = image.size
    return 0 <= point.x < width and 0 <= point.y < height


def sample_pixel(image: Image.Image, point: Point) -> Color:
    """Return the RGB colour at *point*; raises OutOfBounds outside the image."""

    if not in_bounds(image, point):
        raise OutOfBounds(point, image.width, image.height)
    r, g, b = _as_rgb(image).getpixel((point.x, point.y))[:3]
    return Color(r, g, b)


def colors_similar(c1: Color, c2: Color, threshold: int) -> bool:
    """Per-channel test: every channel must differ by strictly less than *threshold*."""

    return (
        abs(c1[0] - c2[0]) < threshold
        and abs(c1[1] - c2[1]) < threshold
        and abs(c1[2] - c2[2]) < threshold
    )


def _scan_range(lo: float, hi: float, limit: int) -> range:
    """Integer range ``floor(lo) <= i < floor(hi)`` clipped to ``[0, limit)``.

    Bounds are clamped before flooring so infinite values are safe; a NaN
    bound gives an empty range.
    """

    if math.isnan(lo) or math.isnan(hi):
        return range(0)
    start = math.floor(min(max(lo, 0.0), float(limit)))
    end = math.floor(min(max(hi, 0.0), float(limit)))
    return range(start, end)


def find_matches(
    image: Image.Image,
    box: BoundingBox,
    reference: Color,
    threshold: int,
) -> list[Point]:
    """Scan *box* for pixels similar to *reference*.

    The scanned range is ``floor(x1) <= x < floor(x2)`` and likewise for y,
    intersected with the image. Degenerate boxes and boxes outside the
    image produce an empty list. Points are returned in row-major order.
    """

    rgb = _as_rgb(image)
    width, height = rgb.size
    xs = _scan_range(box.x1, box.x2, width)
    ys = _scan_range(box.y1, box.y2, height)
    if not xs or not ys:
        return []

    pixels = rgb.load()
    matches: list[Point] = []
    for y in ys:
        for x in xs:
            if colors_similar(pixels[x, y], reference, threshold):
                matches.append(Point(x, y))

    logger.debug(
        "Scanned [%d,%d)x[%d,%d) for %s (threshold=%d): %d matches",
        xs.start, xs.stop, ys.start, ys.stop, tuple(reference), threshold, len(matches),
    )
    return matches


def compute_centroid(points: Sequence[Point]) -> Centroid | None:
    """Arithmetic mean of *points*, or None when there are none."""

    if not points:
        return None
    n = len(points)
    return Centroid(sum(p.x for p in points) / n, sum(p.y for p in points) / n)
