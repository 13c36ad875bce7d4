from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # General
    project_id: Optional[str] = Field(default=None, description="GCP project ID")
    log_level: str = Field("INFO", description="Root logging level.")

    # Record store
    record_store: Literal["memory", "firebase"] = Field("memory")
    firebase_credentials_json: Optional[str] = Field(
        default=None,
        validation_alias="GOOGLE_APPLICATION_CREDENTIALS",
        description="Path to service-account JSON file or JSON string itself.",
    )
    firebase_database_url: Optional[str] = Field(default=None)

    # Image storage
    image_storage: Literal["local", "gcs"] = Field("local")
    images_dir: Path = Field(Path("data/images"))
    bucket_name: str = Field("legend-images")
    gcs_prefix: str = Field("images/")

    # Seeding
    seed_manifest_path: Path = Field(Path("data/legend_bounding_boxes_seed_data.json"))
    seed_on_startup: bool = Field(True)

    # Matching / annotation
    match_threshold: int = Field(15, ge=1, le=256, description="Per-channel colour tolerance (strict).")
    marker_radius: float = Field(5.0, gt=0)
    outline_stroke_width: float = Field(3.0, gt=0)
    arrow_stroke_width: float = Field(2.0, gt=0)


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
