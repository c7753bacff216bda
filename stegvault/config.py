from __future__ import annotations

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Image processing
    max_dimension: int = Field(
        1200,
        ge=2,
        description="Uploads larger than this on either axis are shrunk to half of it (pixels).",
    )
    jpeg_quality: int = Field(85, ge=1, le=95, description="Quality of JPEGs served from /img.")
    max_upload_bytes: int = Field(10 * 1024 * 1024, ge=1, description="Largest accepted upload.")

    # Content addressing
    key_length: int = Field(16, ge=8, le=64, description="Hex characters kept from the SHA-256 digest.")

    # Storage
    storage_backend: Literal["local", "memory", "gcs"] = Field("local")
    image_store_dir: str = Field("./image_store", description="Base directory of the local backend.")
    bucket_name: str = Field("stegvault-images", description="Bucket used by the gcs backend.")
    gcs_prefix: str = Field("images/", description="Object name prefix inside the bucket.")

    # Logging
    log_level: str = Field("INFO")


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
