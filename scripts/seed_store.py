#!/usr/bin/env python
"""Script to seed the image record store from a legend bounding-box manifest."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from legend_locator.config import get_settings
from legend_locator.services.record_store import get_repository
from legend_locator.services.seeding import seed_repository
from legend_locator.services.storage import LocalImageStorage, get_image_storage


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Seed legend bounding boxes into the record store")
    parser.add_argument("--manifest", type=Path, default=settings.seed_manifest_path)
    parser.add_argument("--images_dir", type=Path, default=None, help="Read images from this local directory")
    parser.add_argument("--force", action="store_true", help="Upsert even if the store is not empty")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper())

    storage = LocalImageStorage(args.images_dir) if args.images_dir else get_image_storage()
    repo = get_repository()
    written = seed_repository(repo, storage, args.manifest, force=args.force)
    print(f"Seeded {written} image records ({repo.name} store):")
    for record in repo.list_records():
        print(record.model_dump_json())


if __name__ == "__main__":
    main()
