from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from legend_locator.config import get_settings
from legend_locator.handlers import images_handler
from legend_locator.services.record_store import get_repository
from legend_locator.services.seeding import seed_repository
from legend_locator.services.storage import get_image_storage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    if settings.seed_on_startup:
        try:
            seed_repository(get_repository(), get_image_storage(), settings.seed_manifest_path)
        except Exception as exc:  # pragma: no cover
            logger.exception("Seeding failed: %s", exc)
            raise
    yield


app = FastAPI(title="Legend Locator API", lifespan=lifespan)

app.include_router(images_handler.router)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
