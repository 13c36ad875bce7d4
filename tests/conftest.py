from __future__ import annotations

from pathlib import Path

import pytest

from legend_locator.services.record_store import MemoryImageRepository
from legend_locator.services.storage import LocalImageStorage


@pytest.fixture
def repo() -> MemoryImageRepository:
    return MemoryImageRepository()


@pytest.fixture
def images_dir(tmp_path: Path) -> Path:
    path = tmp_path / "images"
    path.mkdir()
    return path


@pytest.fixture
def storage(images_dir: Path) -> LocalImageStorage:
    return LocalImageStorage(images_dir)
