from __future__ import annotations

from functools import lru_cache

from legend_locator.config import get_settings

from .base import ImageRepository
from .firebase_store import FirebaseImageRepository
from .memory_store import MemoryImageRepository

_REPOSITORIES: dict[str, type[ImageRepository]] = {
    "memory": MemoryImageRepository,
    "firebase": FirebaseImageRepository,
}


@lru_cache()
def get_repository() -> ImageRepository:
    settings = get_settings()
    store_key = settings.record_store.lower()
    if store_key not in _REPOSITORIES:
        raise ValueError(f"Unsupported record store: {store_key}")
    return _REPOSITORIES[store_key]()
