from __future__ import annotations

from .base import ImageRepository
from .firebase_store import FirebaseImageRepository
from .memory_store import MemoryImageRepository
from .registry import get_repository

__all__ = [
    "ImageRepository",
    "FirebaseImageRepository",
    "MemoryImageRepository",
    "get_repository",
]
