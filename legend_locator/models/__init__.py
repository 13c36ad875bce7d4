from .annotation import Annotation, AnnotationStyle, Arrow, Marker, Rectangle
from .click import ImageClickRequest
from .geometry import BoundingBox, Centroid, Color, Point
from .image_record import ImageRecord
from .seed import LegendBBoxSeedData, LegendBoxEntry

__all__ = [
    "Annotation",
    "AnnotationStyle",
    "Arrow",
    "Marker",
    "Rectangle",
    "ImageClickRequest",
    "BoundingBox",
    "Centroid",
    "Color",
    "Point",
    "ImageRecord",
    "LegendBBoxSeedData",
    "LegendBoxEntry",
]
