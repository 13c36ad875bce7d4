"""Image file storage for legend-annotated images.

Two backends serve the same read-only interface:

    LocalImageStorage   files under ``settings.images_dir``
    GCSImageStorage     blobs under ``gs://{bucket_name}/{gcs_prefix}``

Only plain file names are accepted; anything that could address a file
outside the storage root is rejected with ``ValueError``.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path, PurePosixPath
from typing import List

from google.cloud import storage

from legend_locator.config import get_settings

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp")

_CONTENT_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
}


def is_supported_image(name: str) -> bool:
    return PurePosixPath(name).suffix.lower() in SUPPORTED_EXTENSIONS


def check_image_name(name: str) -> str:
    """Return *name* if it is a bare file name, raise ValueError otherwise."""

    if not name or not name.strip():
        raise ValueError("unsafe_image_name: empty")
    if "/" in name or "\\" in name:
        raise ValueError(f"unsafe_image_name: path_separator: {name}")
    if name in (".", ".."):
        raise ValueError(f"unsafe_image_name: parent_traversal: {name}")
    return name


class ImageStorage(ABC):
    """Read-only access to image bytes by file name."""

    @abstractmethod
    def list_names(self) -> List[str]:
        """Sorted names of all supported images."""

    @abstractmethod
    def read_bytes(self, name: str) -> bytes:
        """Raw bytes of *name*; raises FileNotFoundError if absent."""

    def content_type(self, name: str) -> str:
        return _CONTENT_TYPES.get(PurePosixPath(name).suffix.lower(), "image/jpeg")


class LocalImageStorage(ImageStorage):
    def __init__(self, images_dir: str | Path) -> None:
        self._root = Path(images_dir)

    @property
    def root(self) -> Path:
        return self._root

    def list_names(self) -> List[str]:
        if not self._root.is_dir():
            logger.warning("Images directory '%s' does not exist.", self._root)
            return []
        return sorted(p.name for p in self._root.iterdir() if p.is_file() and is_supported_image(p.name))

    def read_bytes(self, name: str) -> bytes:
        path = self._root / check_image_name(name)
        if not path.is_file():
            raise FileNotFoundError(f"Image {name} not found in {self._root}")
        return path.read_bytes()


class GCSImageStorage(ImageStorage):  # pylint: disable=too-few-public-methods
    """Wrapper around Google Cloud Storage blobs."""

    def __init__(self, bucket_name: str, prefix: str = "", client: storage.Client | None = None) -> None:
        self._client = client or storage.Client()
        self._bucket = self._client.bucket(bucket_name)
        self._bucket_name = bucket_name
        self._prefix = prefix
        if not self._bucket.exists():  # pragma: no cover
            logger.warning("GCS bucket '%s' does not exist or access denied.", bucket_name)

    def _blob_name(self, name: str) -> str:
        return f"{self._prefix}{check_image_name(name)}"

    def list_names(self) -> List[str]:
        names = []
        for blob in self._client.list_blobs(self._bucket_name, prefix=self._prefix):
            name = blob.name[len(self._prefix):]
            if name and "/" not in name and is_supported_image(name):
                names.append(name)
        return sorted(names)

    def read_bytes(self, name: str) -> bytes:
        blob = self._bucket.blob(self._blob_name(name))
        if not blob.exists():
            raise FileNotFoundError(f"Image blob not found: gs://{self._bucket_name}/{blob.name}")
        logger.debug("Downloading gs://%s/%s", self._bucket_name, blob.name)
        return blob.download_as_bytes()


@lru_cache()
def get_image_storage() -> ImageStorage:
    settings = get_settings()
    if settings.image_storage == "gcs":
        return GCSImageStorage(settings.bucket_name, settings.gcs_prefix)
    return LocalImageStorage(settings.images_dir)
