"""Click-to-annotation pipeline.

``annotate`` decodes the image, validates the click, samples its colour,
matches that colour inside the legend box and emits the annotation
document. Everything is request-scoped; nothing is cached between calls.
"""
from __future__ import annotations

import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from legend_locator.config import get_settings
from legend_locator.models import (
    Annotation,
    AnnotationStyle,
    Arrow,
    BoundingBox,
    Centroid,
    Marker,
    Point,
    Rectangle,
)

from .errors import CorruptData, OutOfBounds, UnsupportedFormat
from .pixels import compute_centroid, find_matches, in_bounds, sample_pixel

logger = logging.getLogger(__name__)

def decode_image(data: bytes) -> Image.Image:
    """Decode raw bytes into an RGB pixel grid (alpha is dropped)."""

    if not data:
        raise CorruptData("Image data is empty")
    try:
        img = Image.open(io.BytesIO(data))
    except UnidentifiedImageError as exc:
        raise UnsupportedFormat("Image format not recognised", exc) from exc
    except Image.DecompressionBombError as exc:
        raise CorruptData(f"Image exceeds the decompression size limit: {exc}", exc) from exc
    try:
        img.load()
    except (OSError, ValueError, SyntaxError) as exc:
        raise CorruptData(f"Image data could not be decoded: {exc}", exc) from exc
    return img.convert("RGB")


def emit_annotation(
    click: Point,
    box: Optional[BoundingBox],
    centroid: Optional[Centroid],
    width: int,
    height: int,
    style: Optional[AnnotationStyle] = None,
) -> Annotation:
    style = style or AnnotationStyle()
    rectangle = None
    arrow = None
    if box is not None:
        rectangle = Rectangle(x=box.x1, y=box.y1, width=box.x2 - box.x1, height=box.y2 - box.y1)
        if centroid is not None:
            arrow = Arrow(x1=click.x, y1=click.y, x2=centroid.x, y2=centroid.y)
    return Annotation(
        width=width,
        height=height,
        marker=Marker(cx=click.x, cy=click.y, r=style.marker_radius),
        rectangle=rectangle,
        arrow=arrow,
        style=style,
    )


def annotate(
    image_bytes: bytes,
    box: Optional[BoundingBox],
    click: Point,
    *,
    threshold: Optional[int] = None,
    style: Optional[AnnotationStyle] = None,
) -> Annotation:
    """Build the annotation for *click* on the image encoded in *image_bytes*.

    Parameters
    ----------
    image_bytes : bytes
        Encoded image (PNG, JPEG, GIF, BMP, ...).
    box : BoundingBox | None
        Legend region; None produces a marker-only annotation.
    click : Point
        Clicked pixel. Must lie inside the image, otherwise OutOfBounds.
    threshold : int, optional
        Per-channel colour tolerance, defaults to ``Settings.match_threshold``.
    """

    threshold = get_settings().match_threshold if threshold is None else threshold
    image = decode_image(image_bytes)
    if not in_bounds(image, click):
        raise OutOfBounds(click, image.width, image.height)

    centroid = None
    if box is not None:
        reference = sample_pixel(image, click)
        matches = find_matches(image, box, reference, threshold)
        centroid = compute_centroid(matches)
        if centroid is None:
            logger.debug("No legend pixels match %s near click %s", tuple(reference), tuple(click))

    return emit_annotation(click, box, centroid, image.width, image.height, style)
