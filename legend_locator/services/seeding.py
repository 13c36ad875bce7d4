"""Populate the record store from the images on hand and a JSON manifest."""
from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from legend_locator.models import BoundingBox, ImageRecord, LegendBBoxSeedData
from legend_locator.utils.json_io import load_json

from .record_store import ImageRepository
from .storage import ImageStorage

logger = logging.getLogger(__name__)


def load_manifest(path: str | Path) -> dict[str, BoundingBox | None]:
    """Map file name -> bounding box (None when the entry is not four numbers)."""

    seed_data = LegendBBoxSeedData.model_validate(load_json(path))
    boxes: dict[str, BoundingBox | None] = {}
    for entry in seed_data.data:
        if entry.file_name in boxes:
            logger.warning("Duplicate manifest entry for %s; keeping the last one.", entry.file_name)
        boxes[entry.file_name] = entry.bounding_box
    return boxes


def seed_repository(
    repo: ImageRepository,
    storage: ImageStorage,
    manifest_path: str | Path,
    *,
    force: bool = False,
) -> int:
    """Create a record for every stored image; return the number written.

    An already populated repository is left alone unless *force* is set.
    Images without a usable manifest entry get a record with no box.
    """

    if not force and repo.count() > 0:
        logger.info("Record store already populated; skipping seed.")
        return 0

    manifest = Path(manifest_path)
    names = storage.list_names()
    if not manifest.is_file() or not names:
        logger.error("Images or JSON seed data not found (manifest=%s, images=%d).", manifest, len(names))
        return 0

    try:
        boxes = load_manifest(manifest)
    except (ValueError, ValidationError) as exc:
        logger.error("Invalid seed manifest %s: %s", manifest, exc)
        return 0

    for name in names:
        box = boxes.get(name)
        if box is None:
            logger.debug("No legend bounding box for %s", name)
        repo.upsert_record(ImageRecord(name=name).with_bounding_box(box))

    logger.info("Seeded %d image records from %s", len(names), manifest)
    return len(names)
