from __future__ import annotations

import io
import math

from PIL import Image

from imaging import make_png
from legend_locator.models import BoundingBox, Centroid, Point
from legend_locator.reports.overlay_renderer import render_overlay
from legend_locator.services.annotator import emit_annotation


def _decode(data: bytes) -> Image.Image:
    return Image.open(io.BytesIO(data)).convert("RGB")


def test_overlay_keeps_image_size_and_draws_marker() -> None:
    data = make_png(40, 30, fill=(255, 255, 255))
    annotation = emit_annotation(Point(10, 10), None, None, 40, 30)

    out = _decode(render_overlay(data, annotation))

    assert out.size == (40, 30)
    assert out.getpixel((10, 10)) == (0, 0, 0)
    assert out.getpixel((30, 25)) == (255, 255, 255)


def test_overlay_draws_rectangle_and_arrow() -> None:
    data = make_png(60, 60, fill=(255, 255, 255))
    box = BoundingBox(x1=30, y1=5, x2=55, y2=25)
    annotation = emit_annotation(Point(5, 50), box, Centroid(40.0, 15.0), 60, 60)

    out = _decode(render_overlay(data, annotation))

    assert out.getpixel((30, 15)) == (0, 0, 0)  # left edge of the legend outline
    assert out.getpixel((22, 33)) == (255, 0, 0)  # on the arrow shaft


def test_overlay_handles_degenerate_box_and_zero_length_arrow() -> None:
    data = make_png(10, 10)
    box = BoundingBox(x1=8, y1=8, x2=2, y2=2)
    annotation = emit_annotation(Point(5, 5), box, Centroid(5.0, 5.0), 10, 10)

    out = _decode(render_overlay(data, annotation))

    assert out.size == (10, 10)


def test_overlay_skips_non_finite_rectangle() -> None:
    data = make_png(10, 10, fill=(255, 255, 255))
    box = BoundingBox(x1=2, y1=2, x2=math.inf, y2=8)
    annotation = emit_annotation(Point(8, 8), box, None, 10, 10)

    out = _decode(render_overlay(data, annotation))

    assert out.getpixel((2, 3)) == (255, 255, 255)
