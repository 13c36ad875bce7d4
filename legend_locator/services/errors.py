"""Errors raised while turning a click into an annotation."""
from __future__ import annotations

from typing import Optional

from legend_locator.models import Point


class AnnotationError(Exception):
    """Base class for failures scoped to a single annotation request."""


class OutOfBounds(AnnotationError):
    """Raised when a coordinate lies outside the decoded image."""

    def __init__(self, point: Point, width: int, height: int):
        super().__init__(f"Point ({point.x}, {point.y}) is outside image bounds {width}x{height}")
        self.point = point
        self.width = width
        self.height = height


class ImageDecodeError(AnnotationError):
    """Raised when image bytes cannot be decoded into a pixel grid."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class UnsupportedFormat(ImageDecodeError):
    pass


class CorruptData(ImageDecodeError):
    pass
