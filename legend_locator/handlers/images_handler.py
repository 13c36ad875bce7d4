"""Image listing, raw image serving and click annotation endpoints."""
from __future__ import annotations

import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from legend_locator.config import Settings, get_settings
from legend_locator.models import AnnotationStyle, ImageClickRequest
from legend_locator.reports.overlay_renderer import render_overlay
from legend_locator.services.annotator import annotate
from legend_locator.services.errors import CorruptData, OutOfBounds, UnsupportedFormat
from legend_locator.services.record_store import ImageRepository, get_repository
from legend_locator.services.storage import ImageStorage, check_image_name, get_image_storage

router = APIRouter(prefix="/api/images")
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _safe_name(image_name: str) -> str:
    try:
        return check_image_name(image_name)
    except ValueError as exc:
        logger.warning("Rejected image name %r: %s", image_name, exc)
        raise HTTPException(status_code=400, detail="Invalid image name") from exc


def _style_from_settings(settings: Settings) -> AnnotationStyle:
    return AnnotationStyle(
        marker_radius=settings.marker_radius,
        outline_stroke_width=settings.outline_stroke_width,
        arrow_stroke_width=settings.arrow_stroke_width,
    )


# ---------------------------------------------------------------------------
# Listing / raw bytes
# ---------------------------------------------------------------------------


@router.get("")
async def list_images(repo: ImageRepository = Depends(get_repository)) -> List[str]:
    return [r.name for r in repo.list_records()]


@router.get("/{image_name}")
async def get_image(image_name: str, storage: ImageStorage = Depends(get_image_storage)):
    name = _safe_name(image_name)
    try:
        data = storage.read_bytes(name)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Image {name} not found on server.")
    return Response(content=data, media_type=storage.content_type(name))


# ---------------------------------------------------------------------------
# POST click
# ---------------------------------------------------------------------------


@router.post("/{image_name}/click")
async def click_image(
    image_name: str,
    click: ImageClickRequest,
    output: Literal["svg", "json", "png"] = Query("svg", alias="format"),
    threshold: Optional[int] = Query(None, ge=1, le=256),
    repo: ImageRepository = Depends(get_repository),
    storage: ImageStorage = Depends(get_image_storage),
    settings: Settings = Depends(get_settings),
):
    name = _safe_name(image_name)

    record = repo.get_record(name)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No metadata found for image {name}.")

    try:
        image_bytes = storage.read_bytes(name)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Image file {name} not found.")

    try:
        annotation = annotate(
            image_bytes,
            record.legend_bounding_box,
            click.to_point(),
            threshold=threshold or settings.match_threshold,
            style=_style_from_settings(settings),
        )
    except OutOfBounds as exc:
        logger.warning("Click rejected for %s: %s", name, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UnsupportedFormat as exc:
        logger.warning("Unsupported image format for %s: %s", name, exc)
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except CorruptData as exc:
        logger.warning("Corrupt image data for %s: %s", name, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    logger.debug("Annotated %s at (%d, %d): arrow=%s", name, click.x, click.y, annotation.arrow is not None)

    if output == "json":
        return annotation.model_dump(mode="json")
    if output == "png":
        return Response(content=render_overlay(image_bytes, annotation), media_type="image/png")
    return Response(content=annotation.to_svg().encode("utf-8"), media_type="image/svg+xml")
