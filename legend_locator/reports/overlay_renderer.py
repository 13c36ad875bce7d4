"""Raster preview of an annotation drawn onto its source image using Pillow."""
from __future__ import annotations

import io
import logging
import math

from PIL import Image, ImageColor, ImageDraw

from legend_locator.models import Annotation
from legend_locator.services.annotator import decode_image

logger = logging.getLogger(__name__)

_HEAD_LENGTH = 10.0
_HEAD_HALF_WIDTH = 3.5


def _rgba(color: str) -> tuple[int, int, int, int]:
    return ImageColor.getcolor(color, "RGBA")  # type: ignore[return-value]


def _arrow_head(x1: float, y1: float, x2: float, y2: float, scale: float) -> list[tuple[float, float]]:
    angle = math.atan2(y2 - y1, x2 - x1)
    length = _HEAD_LENGTH * scale
    half = _HEAD_HALF_WIDTH * scale
    base_x = x2 - length * math.cos(angle)
    base_y = y2 - length * math.sin(angle)
    return [
        (x2, y2),
        (base_x - half * math.sin(angle), base_y + half * math.cos(angle)),
        (base_x + half * math.sin(angle), base_y - half * math.cos(angle)),
    ]


def render_overlay(image_bytes: bytes, annotation: Annotation) -> bytes:
    """Draw *annotation* over the decoded image and return PNG bytes."""

    base = decode_image(image_bytes).convert("RGBA")
    img = Image.new("RGBA", base.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    style = annotation.style

    rect = annotation.rectangle
    if rect is not None and all(math.isfinite(v) for v in (rect.x, rect.y, rect.width, rect.height)):
        xs = sorted((rect.x, rect.x + rect.width))
        ys = sorted((rect.y, rect.y + rect.height))
        draw.rectangle(
            [xs[0], ys[0], xs[1], ys[1]],
            outline=_rgba(style.outline_color),
            width=max(1, round(style.outline_stroke_width)),
        )

    if annotation.arrow is not None:
        a = annotation.arrow
        width = max(1, round(style.arrow_stroke_width))
        draw.line([(a.x1, a.y1), (a.x2, a.y2)], fill=_rgba(style.arrow_outline_color), width=width * 2)
        draw.line([(a.x1, a.y1), (a.x2, a.y2)], fill=_rgba(style.arrow_color), width=width)
        draw.polygon(_arrow_head(a.x1, a.y1, a.x2, a.y2, width), fill=_rgba(style.arrow_color))

    m = annotation.marker
    draw.ellipse(
        [m.cx - m.r, m.cy - m.r, m.cx + m.r, m.cy + m.r],
        fill=_rgba(style.marker_fill),
    )

    out = Image.alpha_composite(base, img)
    buffer = io.BytesIO()
    out.save(buffer, format="PNG")
    logger.debug("Rendered %dx%d overlay", out.width, out.height)
    return buffer.getvalue()
